"""
Рендер схем OpenAPI в типы TypeScript
"""

import json
from typing import Any, Dict, List, Optional

from ..errors import UnsupportedSchemaError
from ..utils.naming import is_identifier, model_name
from .schema_resolver import Registry, is_reference, reference_name

MODELS_NAMESPACE = "Models."

ENUMERABLE_TYPES = ("integer", "number", "string")

PRIMITIVE_NAMES = {
    "integer": "number",
    "number": "number",
    "string": "string",
    "boolean": "boolean",
}


class TypeRenderer:
    """Рендер схемы или ссылки на схему в строку типа TypeScript.

    Ссылка никогда не раскрывается: вместо нее выводится имя типа,
    который объявлен отдельно в models.ts. Поэтому циклические и
    общие схемы рендерятся за конечное число шагов.
    """

    def __init__(self, registry: Registry, namespace: str = MODELS_NAMESPACE):
        self.registry = registry
        self.namespace = namespace

    def render(self, schema: Any) -> str:
        """Тип для схемы или ссылки"""
        if is_reference(schema):
            return self.render_reference(schema["$ref"])

        return self.render_expanded(schema)

    def render_reference(self, ref: str) -> str:
        return f"{self.namespace}{model_name(reference_name(ref))}"

    def render_expanded(self, schema: Any, multiline: bool = False) -> str:
        """Тип для схемы без сокращения ссылки на верхнем уровне"""
        node = self.registry.resolve_chain(schema)
        if not isinstance(node, dict):
            raise UnsupportedSchemaError(type(node).__name__)

        kind = schema_kind(node)

        if kind in ENUMERABLE_TYPES:
            return self._render_enumerable(node, kind)
        elif kind == "array":
            return f"Array<{self.render(node.get('items', {}))}>"
        elif kind == "object":
            return self.render_object(node, multiline=multiline)
        elif kind == "boolean":
            return PRIMITIVE_NAMES["boolean"]
        else:
            raise UnsupportedSchemaError(kind)

    def render_object(self, node: Dict[str, Any], multiline: bool = False) -> str:
        """Инлайн запись объекта: { name: T; other?: U; }"""
        separator = "\n" if multiline else " "
        indent = "  " if multiline else ""

        required_names = node.get("required")
        if not isinstance(required_names, list):
            required_names = []

        fields: List[str] = []
        for name, property_schema in (node.get("properties") or {}).items():
            marker = ":" if self._is_required(name, property_schema, required_names) else "?:"
            key = name if is_identifier(name) else json.dumps(name, ensure_ascii=False)
            fields.append(f"{indent}{key}{marker} {self.render(property_schema)};")

        return "{" + separator + "".join(f + separator for f in fields) + "}"

    def _is_required(self, name: str, property_schema: Any, required_names: List[str]) -> bool:
        if name in required_names:
            return True

        # required: true прямо на свойстве
        resolved = self.registry.resolve(property_schema)
        return isinstance(resolved, dict) and resolved.get("required") is True

    @staticmethod
    def _render_enumerable(node: Dict[str, Any], kind: str) -> str:
        literals = node.get("enum")
        if literals:
            return " | ".join(json.dumps(value, ensure_ascii=False) for value in literals)

        return PRIMITIVE_NAMES[kind]


def schema_kind(node: Dict[str, Any]) -> Optional[str]:
    """Вариант схемы по ключу type"""
    kind = node.get("type")
    if kind is None:
        if "properties" in node:
            return "object"
        if "items" in node:
            return "array"
    return kind


def render_type(
    registry: Registry, schema: Any, namespace: str = MODELS_NAMESPACE
) -> str:
    """Рендер типа схемы или ссылки"""
    return TypeRenderer(registry, namespace).render(schema)
