"""
Pydantic schema definitions for the catalog module.

Fields are declared in snake_case and exposed in camelCase so that the
JSON matches what the storefront front-end reads (``soundDesigner``,
``profileImage``, ``soundPreviewUrl``...). Every model can be built
straight from an ORM row.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DesignerSummary(CamelModel):
    """The public part of a sound designer's profile."""

    username: str
    profile_image: Optional[str] = None


class GenreOut(CamelModel):
    id: str
    name: str


class VstOut(CamelModel):
    id: str
    name: str
    type: str


class PresetOut(CamelModel):
    """A single preset as shown in search results and on cards."""

    id: str
    title: str
    description: Optional[str] = None
    price: float
    preset_type: Optional[str] = None
    sound_preview_url: Optional[str] = None
    genre_id: Optional[str] = None
    vst_id: Optional[str] = None
    created_at: datetime
    sound_designer: Optional[DesignerSummary] = None
    genre: Optional[GenreOut] = None
    vst: Optional[VstOut] = None


class PackPresetRef(CamelModel):
    """Reference from a pack to one of its presets, in pack order."""

    preset: PresetOut


class PackOut(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    price: float
    created_at: datetime
    sound_designer: Optional[DesignerSummary] = None
    presets: List[PackPresetRef] = []
