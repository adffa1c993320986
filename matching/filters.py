"""Filter precedence rules and the storage-neutral expert directory query."""

from dataclasses import dataclass
from typing import Literal

from models.case_analysis import CaseAnalysis
from server.schemas.requests import SearchRequest

DEFAULT_PAGE_SIZE = 20

FilterSource = Literal["explicit", "ai", "none"]

# Columns matched by the free-text query (ORed together)
TEXT_SEARCH_FIELDS = ("full_name", "specialization", "bio", "location")


@dataclass(frozen=True)
class FilterResolution:
    values: tuple[str, ...] = ()
    source: FilterSource = "none"

    @property
    def active(self) -> bool:
        return bool(self.values)


def resolve_filter(
    explicit: str | None, ai_suggested: list[str] | str | None
) -> FilterResolution:
    """
    Decide the effective filter from a user choice and model suggestions.

    An explicit value replaces the suggestions outright; the two are never
    merged. Suggestions apply only when the user chose nothing.
    """
    if explicit and explicit.strip():
        return FilterResolution(values=(explicit.strip(),), source="explicit")

    if isinstance(ai_suggested, str):
        ai_suggested = [ai_suggested]
    suggested = tuple(s.strip() for s in ai_suggested or [] if s and s.strip())
    if suggested:
        return FilterResolution(values=suggested, source="ai")

    return FilterResolution()


@dataclass(frozen=True)
class DirectoryQuery:
    """
    Everything the directory needs to list matching experts.

    Every populated group is ANDed with the others. Within ``text`` the
    fields in TEXT_SEARCH_FIELDS are ORed, within ``specialties`` the values
    are ORed, within ``languages`` every value must be present.
    """

    active_only: bool = True
    text: str | None = None
    specialties: tuple[str, ...] = ()
    specialty_source: FilterSource = "none"
    location: str | None = None
    location_source: FilterSource = "none"
    min_experience: float | None = None
    max_experience: float | None = None
    min_rate: float | None = None
    max_rate: float | None = None
    trial_testimony_required: bool = False
    languages: tuple[str, ...] = ()
    certifications: str | None = None
    order_by: str = "rating"
    descending: bool = True
    limit: int = DEFAULT_PAGE_SIZE

    def describe(self) -> dict:
        """Loggable summary of the populated filters."""
        return {
            key: value
            for key, value in self.__dict__.items()
            if value not in (None, (), False, "none")
        }


def build_enhanced_query(query: str | None, analysis: CaseAnalysis | None) -> str | None:
    """Append case-analysis terms to the user's query; unchanged without analysis."""
    if analysis is None:
        return query

    terms = analysis.search_terms()
    if query and query.strip():
        return f"{query} {terms}" if terms else query
    return terms


def build_directory_query(
    request: SearchRequest,
    analysis: CaseAnalysis | None,
    enhanced_query: str | None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> DirectoryQuery:
    specialty = resolve_filter(
        request.specialty, analysis.suggested_specialties if analysis else None
    )
    location = resolve_filter(request.location, analysis.jurisdiction if analysis else None)

    text = enhanced_query.strip() if enhanced_query and enhanced_query.strip() else None

    return DirectoryQuery(
        active_only=True,
        text=text,
        specialties=specialty.values,
        specialty_source=specialty.source,
        location=location.values[0] if location.active else None,
        location_source=location.source,
        min_experience=request.min_experience,
        max_experience=request.max_experience,
        min_rate=request.min_rate,
        max_rate=request.max_rate,
        trial_testimony_required=bool(request.trial_testimony),
        languages=tuple(request.languages),
        certifications=request.certifications,
        limit=page_size,
    )
