"""
Главный модуль генератора - чистый интерфейс
"""

import os
import tempfile
from typing import Dict, Any, Optional

from .internal.parser.openapi import OpenApiParser
from .internal.types.models import Project
from .internal.types.policy import GenerationPolicy


class ApiClientGenerator:
    """Чистый интерфейс для генерации API клиентов"""

    def __init__(
        self,
        openapi_spec: Dict[str, Any],
        source_url: Optional[str] = None,
        policy: Optional[GenerationPolicy] = None,
    ):
        self.parser = OpenApiParser(openapi_spec, source_url, policy)

    def generate(self) -> Project:
        """Генерация проекта клиента"""
        return self.parser.parse()


def generate_client(
    openapi_spec: Dict[str, Any],
    source_url: Optional[str] = None,
    policy: Optional[GenerationPolicy] = None,
) -> Project:
    """Создание API клиента из OpenAPI спецификации"""
    generator = ApiClientGenerator(openapi_spec, source_url, policy)
    return generator.generate()


def save_project(project: Project, target_path: str) -> Dict[str, str]:
    """
    Запись файлов проекта: либо все, либо ничего.

    Весь текст рендерится заранее, затем каждый файл пишется во временный
    файл рядом с целевым. Только когда все временные файлы записаны, они
    переносятся на место через os.replace.

    Returns:
        Словарь file_name -> абсолютный путь записанного файла
    """
    rendered = project.render()
    staged = []

    try:
        for file_name, text in rendered.items():
            path = os.path.join(target_path, file_name)
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

            fd, tmp_path = tempfile.mkstemp(
                dir=os.path.dirname(path) or ".", prefix=".openapi-", suffix=".tmp"
            )
            staged.append((tmp_path, path))
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
    except OSError:
        for tmp_path, _ in staged:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        raise

    written = {}
    for (tmp_path, path), file_name in zip(staged, rendered):
        os.replace(tmp_path, path)
        written[file_name] = os.path.abspath(path)

    return written
