"""
Конфигурация для генерации API клиента
"""

import os
from typing import Optional
import toml
from dataclasses import dataclass, asdict

from .internal.types.policy import GenerationPolicy

CONFIG_FILE_NAME = "openapi.toml"


@dataclass
class OpenApiConfig:
    """Конфигурация генератора OpenAPI клиента"""

    url: Optional[str] = None
    dirname: Optional[str] = None

    strict_tags: bool = True
    body_required_by_presence: bool = False
    type_aliases: bool = False
    multiline_models: bool = False

    @classmethod
    def from_file(
        cls, config_path: str = CONFIG_FILE_NAME, search_dir: Optional[str] = None
    ) -> Optional["OpenApiConfig"]:
        """Загрузка конфигурации из файла"""
        # Если указана директория для поиска, ищем конфиг там
        if search_dir and os.path.isdir(search_dir):
            config_in_dir = os.path.join(search_dir, CONFIG_FILE_NAME)
            if os.path.exists(config_in_dir):
                config_path = config_in_dir

        if not os.path.exists(config_path):
            return None

        try:
            config_data = toml.load(config_path)
        except (OSError, toml.TomlDecodeError):
            return None

        return cls(
            url=config_data.get("url"),
            dirname=config_data.get("dirname", "api"),
            strict_tags=bool(config_data.get("strict_tags", True)),
            body_required_by_presence=bool(
                config_data.get("body_required_by_presence", False)
            ),
            type_aliases=bool(config_data.get("type_aliases", False)),
            multiline_models=bool(config_data.get("multiline_models", False)),
        )

    def save_to_file(self, config_path: str = CONFIG_FILE_NAME) -> None:
        """Сохранение конфигурации в файл"""
        # toml не умеет сохранять None
        config_data = {k: v for k, v in asdict(self).items() if v is not None}

        with open(config_path, "w", encoding="utf-8") as f:
            toml.dump(config_data, f)

    def merge_with_args(self, args) -> "OpenApiConfig":
        """Объединение с аргументами командной строки"""
        return OpenApiConfig(
            url=getattr(args, "url", None) or self.url,
            dirname=getattr(args, "dirname", None) or self.dirname,
            strict_tags=self.strict_tags and not getattr(args, "lenient", False),
            body_required_by_presence=self.body_required_by_presence
            or getattr(args, "body_required_by_presence", False),
            type_aliases=self.type_aliases or getattr(args, "type_aliases", False),
            multiline_models=self.multiline_models
            or getattr(args, "multiline_models", False),
        )

    def policy(self) -> GenerationPolicy:
        return GenerationPolicy(
            strict_tags=self.strict_tags,
            body_required_by_presence=self.body_required_by_presence,
            type_aliases=self.type_aliases,
            multiline_models=self.multiline_models,
        )
