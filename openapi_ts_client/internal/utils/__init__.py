"""Утилиты для генератора"""

from .naming import (
    identifier,
    is_identifier,
    model_name,
    file_slug,
    template_url,
)

__all__ = [
    "identifier",
    "is_identifier",
    "model_name",
    "file_slug",
    "template_url",
]
