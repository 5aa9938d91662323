"""Утилиты для имен TypeScript идентификаторов и файлов"""

import re
from typing import Dict, Optional

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def is_identifier(name: str) -> bool:
    return bool(_IDENTIFIER.match(name))


def identifier(name: str) -> str:
    """
    Превращает имя параметра в допустимый идентификатор TypeScript.

    Examples:
        >>> identifier("petId")
        'petId'
        >>> identifier("pet-id")
        'petId'
        >>> identifier("X-Request-ID")
        'xRequestID'
    """
    if is_identifier(name):
        return name

    parts = [p for p in re.split(r"[^A-Za-z0-9_$]+", name) if p]
    if not parts:
        return "_"

    result = parts[0][:1].lower() + parts[0][1:]
    result += "".join(p[:1].upper() + p[1:] for p in parts[1:])

    if result[0].isdigit():
        result = "_" + result
    return result


def model_name(name: str) -> str:
    """
    Имя схемы -> имя интерфейса (PascalCase без недопустимых символов).

    Регистр остальных букв сохраняется: UserShort остается UserShort.

    Examples:
        >>> model_name("pet")
        'Pet'
        >>> model_name("pet-status")
        'PetStatus'
    """
    parts = [p for p in re.split(r"[^A-Za-z0-9_]+", name) if p]
    result = "".join(p[:1].upper() + p[1:] for p in parts)
    if not result:
        return "Model"
    if result[0].isdigit():
        result = "_" + result
    return result


def file_slug(tag: str) -> str:
    """Имя файла модуля клиента для тега"""
    slug = re.sub(r"[^A-Za-z0-9_-]+", "_", tag.strip()).strip("_")
    return slug or "default"


def template_url(
    base_url: str, path: str, variables: Optional[Dict[str, str]] = None
) -> str:
    """
    Склеивает base URL и путь, заменяя {param} на ${param}.

    Args:
        base_url: servers[0].url
        path: Путь операции с плейсхолдерами
        variables: Имя параметра пути -> имя переменной метода

    Examples:
        >>> template_url("https://api.example.com/", "/pets/{id}")
        'https://api.example.com/pets/${id}'
        >>> template_url("https://api.example.com", "/pets/{body}", {"body": "bodyPath"})
        'https://api.example.com/pets/${bodyPath}'
    """
    variables = variables or {}
    url = base_url.rstrip("/") + path
    return _PLACEHOLDER.sub(
        lambda m: "${" + variables.get(m.group(1), identifier(m.group(1))) + "}", url
    )
