"""Исключения генератора"""

from typing import Optional


class GenerationError(Exception):
    """Базовая ошибка генерации клиента"""

    def __init__(self, message: str, location: Optional[str] = None) -> None:
        self.location = location
        full_message = message if not location else f"[{location}] {message}"
        super().__init__(full_message)


class DocumentLoadError(GenerationError):
    """Не удалось прочитать или распарсить OpenAPI документ"""


class MissingBaseUrlError(GenerationError):
    """В документе нет servers[0].url"""

    def __init__(self, location: Optional[str] = None) -> None:
        super().__init__("Base URL не указан (servers[0].url)", location)


class MissingTagsError(GenerationError):
    """У операции нет тегов (строгий режим)"""

    def __init__(self, path: str, verb: str) -> None:
        self.path = path
        self.verb = verb
        super().__init__("У операции нет тегов", f"{path} -> {verb}")


class MissingOperationIdError(GenerationError):
    """У операции нет operationId"""

    def __init__(self, path: str, verb: str) -> None:
        self.path = path
        self.verb = verb
        super().__init__("Не указан operationId", f"{path} -> {verb}")


class UnsupportedSchemaError(GenerationError):
    """Неизвестный тип схемы"""

    def __init__(self, type_name, location: Optional[str] = None) -> None:
        self.type_name = type_name
        super().__init__(f'"{type_name}" не является поддерживаемым типом', location)


class DanglingReferenceError(GenerationError):
    """Ссылка $ref указывает в никуда"""

    def __init__(self, ref: str, segment: Optional[str] = None) -> None:
        self.ref = ref
        self.segment = segment
        message = "Не удалось разрешить ссылку"
        if segment is not None:
            message += f" (нет ключа '{segment}')"
        super().__init__(message, ref)
