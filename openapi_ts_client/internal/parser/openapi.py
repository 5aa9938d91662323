import json
import os
from typing import Dict, Any, Optional

import httpx
import jsonref
import yaml

from ..errors import DanglingReferenceError, DocumentLoadError, MissingBaseUrlError
from ..types.models import Project
from ..types.policy import GenerationPolicy
from ..types.schema_resolver import Registry
from ..generator.client_generator import ClientGenerator

LOCAL_REF_PREFIX = "#/components/"


def _parse_text(text: str, source: str) -> Dict[str, Any]:
    """JSON или YAML текст -> словарь"""
    try:
        if source.lower().endswith((".yml", ".yaml")):
            document = yaml.safe_load(text)
        else:
            document = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentLoadError(f"Не удалось распарсить документ: {e}", source) from e

    if not isinstance(document, dict):
        raise DocumentLoadError("Корень документа должен быть объектом", source)

    return document


def load_document(url: str, timeout: float = 30.0) -> Dict[str, Any]:
    """Загрузка OpenAPI документа из локального файла или по URL"""
    if url.startswith(("http://", "https://")):
        # Для адреса сервиса без файла берем стандартный openapi.json
        if not url.lower().endswith((".json", ".yml", ".yaml")):
            url = url + ("" if url.endswith("/") else "/") + "openapi.json"

        try:
            response = httpx.get(url, timeout=timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise DocumentLoadError(f"Не удалось загрузить документ: {e}", url) from e

        return _parse_text(response.text, url)

    if not os.path.exists(url):
        raise DocumentLoadError("Файл не найден", url)

    with open(url, "r", encoding="utf-8") as f:
        return _parse_text(f.read(), url)


def check_references(document: Dict[str, Any]) -> None:
    """
    Проверка что все $ref документа разрешаются.

    Поддерживаются только локальные ссылки в components. Обход не
    заходит внутрь ссылок: цель ссылки проверяется там, где она
    объявлена, поэтому циклы не мешают.

    Raises:
        DanglingReferenceError: Ссылка не разрешается или не локальная
    """
    proxied = jsonref.replace_refs(document, lazy_load=True)

    stack = [proxied]
    while stack:
        node = stack.pop()

        if isinstance(node, jsonref.JsonRef):
            ref = node.__reference__["$ref"]
            if not ref.startswith(LOCAL_REF_PREFIX):
                raise DanglingReferenceError(ref)
            try:
                node.__subject__
            except jsonref.JsonRefError as e:
                raise DanglingReferenceError(ref) from e
        elif isinstance(node, dict):
            stack.extend(node.values())
        elif isinstance(node, list):
            stack.extend(node)


class OpenApiParser:
    """Парсер OpenAPI спецификации"""

    def __init__(
        self,
        openapi_dict: Dict[str, Any],
        source_url: Optional[str] = None,
        policy: Optional[GenerationPolicy] = None,
    ):
        self.openapi_dict = openapi_dict
        self.source_url = source_url
        self.policy = policy or GenerationPolicy()

    def base_url(self) -> str:
        """servers[0].url, обязателен"""
        servers = self.openapi_dict.get("servers") or []
        url = servers[0].get("url") if servers and isinstance(servers[0], dict) else None
        if not url:
            raise MissingBaseUrlError(self.source_url)
        return url

    def parse(self) -> Project:
        """Парсинг OpenAPI в Project структуру"""
        base_url = self.base_url()
        check_references(self.openapi_dict)

        registry = Registry(self.openapi_dict.get("components"))
        generator = ClientGenerator(
            self.openapi_dict, registry, base_url, self.policy, self.source_url
        )
        return generator.generate()
