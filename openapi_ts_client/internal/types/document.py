from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Contact(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None


class License(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    url: Optional[str] = None


class Info(BaseModel):
    """Раздел info документа"""

    model_config = ConfigDict(
        extra="ignore", populate_by_name=True, coerce_numbers_to_str=True
    )

    title: str = "API"
    description: Optional[str] = None
    version: str = ""
    terms_of_service: Optional[str] = Field(default=None, alias="termsOfService")
    contact: Optional[Contact] = None
    license: Optional[License] = None


class TagInfo(BaseModel):
    """Описание тега из верхнеуровневого списка tags"""

    model_config = ConfigDict(extra="ignore")

    name: str
    description: Optional[str] = None
