"""
Filter construction for catalog search.

A search request carries up to four independent filters. Each
``FilterDimension`` knows how to turn its value into one SQL clause;
dimensions that are absent or empty produce nothing. When no clause is
produced the query is left without a WHERE, so "no filters" is the
plain unfiltered catalog rather than an empty conjunction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from sqlalchemy import Select, and_, or_, select
from sqlalchemy.orm import selectinload
from sqlalchemy.sql.elements import ColumnElement

from ..storage import PresetUpload, Vst


def _split_csv(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class SearchParams:
    search_term: str = ""
    genres: Tuple[str, ...] = field(default_factory=tuple)
    vst_types: Tuple[str, ...] = field(default_factory=tuple)
    preset_types: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_query(
        cls,
        search_term: Optional[str] = None,
        genres: Optional[str] = None,
        vst_types: Optional[str] = None,
        preset_types: Optional[str] = None,
    ) -> "SearchParams":
        """Parse raw query-string values (comma-separated lists)."""
        return cls(
            search_term=(search_term or "").strip(),
            genres=_split_csv(genres),
            vst_types=_split_csv(vst_types),
            preset_types=_split_csv(preset_types),
        )

    @property
    def is_empty(self) -> bool:
        return not build_clauses(self)


def _text_clause(params: SearchParams) -> Optional[ColumnElement]:
    if not params.search_term:
        return None
    # Literal substring match: % and _ in the term are escaped.
    term = params.search_term
    return or_(
        PresetUpload.title.icontains(term, autoescape=True),
        PresetUpload.description.icontains(term, autoescape=True),
    )


def _genre_clause(params: SearchParams) -> Optional[ColumnElement]:
    if not params.genres:
        return None
    return PresetUpload.genre_id.in_(params.genres)


def _vst_type_clause(params: SearchParams) -> Optional[ColumnElement]:
    if not params.vst_types:
        return None
    return PresetUpload.vst.has(Vst.type.in_(params.vst_types))


def _preset_type_clause(params: SearchParams) -> Optional[ColumnElement]:
    if not params.preset_types:
        return None
    return PresetUpload.preset_type.in_(params.preset_types)


class FilterDimension(str, Enum):
    TEXT = "searchTerm"
    GENRE = "genres"
    VST_TYPE = "vstTypes"
    PRESET_TYPE = "presetTypes"


_CLAUSE_BUILDERS: Dict[FilterDimension, Callable[[SearchParams], Optional[ColumnElement]]] = {
    FilterDimension.TEXT: _text_clause,
    FilterDimension.GENRE: _genre_clause,
    FilterDimension.VST_TYPE: _vst_type_clause,
    FilterDimension.PRESET_TYPE: _preset_type_clause,
}


def build_clauses(params: SearchParams) -> List[ColumnElement]:
    """Return one clause per present, non-empty filter, in dimension order."""
    clauses: List[ColumnElement] = []
    for dimension in FilterDimension:
        clause = _CLAUSE_BUILDERS[dimension](params)
        if clause is not None:
            clauses.append(clause)
    return clauses


def build_search_query(params: SearchParams) -> Select:
    """Build the catalog query for ``params``, newest first.

    Designer, genre and VST rows are loaded alongside each preset.
    """
    query = select(PresetUpload).options(
        selectinload(PresetUpload.sound_designer),
        selectinload(PresetUpload.genre),
        selectinload(PresetUpload.vst),
    )
    clauses = build_clauses(params)
    if clauses:
        query = query.where(and_(*clauses))
    return query.order_by(PresetUpload.created_at.desc())
