from typing import Any, Dict, Optional

from ..errors import DanglingReferenceError

# "#/components/schemas/Pet" -> ["schemas", "Pet"]
REF_PREFIX_SEGMENTS = 2


def is_reference(value: Any) -> bool:
    """Проверка что значение является ссылкой $ref"""
    return isinstance(value, dict) and "$ref" in value


def reference_name(ref: str) -> str:
    """Последний сегмент пути ссылки - имя именованного типа"""
    return ref.split("/")[-1]


class Registry:
    """Хранилище components документа, только для чтения.

    Ссылки разрешаются обходом components по сегментам пути, первые два
    сегмента ("#" и "components") отбрасываются. Результаты кэшируются
    по полному пути ссылки.
    """

    def __init__(self, components: Optional[Dict[str, Any]] = None):
        self._components = components or {}
        self._resolved: Dict[str, Any] = {}

    @property
    def schemas(self) -> Dict[str, Any]:
        return self._components.get("schemas") or {}

    def lookup(self, ref: str) -> Any:
        """Значение по пути ссылки"""
        if ref in self._resolved:
            return self._resolved[ref]

        current = self._components
        for raw_segment in ref.split("/")[REF_PREFIX_SEGMENTS:]:
            segment = raw_segment.replace("~1", "/").replace("~0", "~")
            if not isinstance(current, dict) or segment not in current:
                raise DanglingReferenceError(ref, segment)
            current = current[segment]

        self._resolved[ref] = current
        return current

    def resolve(self, value: Any) -> Any:
        """Ссылка -> значение из реестра, всё остальное возвращается как есть"""
        if is_reference(value):
            return self.lookup(value["$ref"])
        return value

    def resolve_chain(self, value: Any) -> Any:
        """Разрешение цепочки ссылок (A -> B -> объект) до конечного значения"""
        seen = set()
        while is_reference(value):
            ref = value["$ref"]
            if ref in seen:
                raise DanglingReferenceError(ref)
            seen.add(ref)
            value = self.lookup(ref)
        return value


def resolve(registry: Registry, value: Any) -> Any:
    return registry.resolve(value)
