"""Place lookup result shapes."""

from pydantic import BaseModel, Field

from tripbook.models.common import Provenance


class LocalizedText(BaseModel):
    """Text in English and Traditional Chinese."""

    en: str = ""
    zh: str = ""


class LocalizedList(BaseModel):
    """List of short strings in English and Traditional Chinese."""

    en: list[str] = Field(default_factory=list)
    zh: list[str] = Field(default_factory=list)


class PlaceResult(BaseModel):
    """Best-effort place details. ``degraded`` marks a placeholder result."""

    name: str
    address: str = ""
    map_url: str
    description: LocalizedText = Field(default_factory=LocalizedText)
    fun_things: LocalizedList = Field(default_factory=LocalizedList)
    degraded: bool = False
    provenance: Provenance
