"""Pydantic response models (DTOs) for FastAPI endpoints."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelDTO(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExpertResult(CamelDTO):
    id: Any
    name: str | None = None
    specialty: str | None = None
    category: str | None = None
    description: str
    location: str
    experience: str
    rate: str
    rating: float = 0
    reviews: int = 0
    case_count: int = 0
    languages: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    education: list[str] = Field(default_factory=list)
    availability: str
    availability_color: str
    contact_status: Literal["green", "yellow", "red"] = "red"
    contact_email: str | None = None
    contact_phone: str | None = None
    linkedin_url: str | None = None
    profile_url: str | None = None
    tags: list[str] = Field(default_factory=list)


class ExpertSearchResponseDTO(CamelDTO):
    query: str | None
    original_query: str | None
    case_analysis: dict[str, Any] | None
    total: int
    experts: list[ExpertResult]

    @classmethod
    def from_outcome(cls, outcome):
        """Convert an ExpertSearchOutcome to DTO."""
        return cls(
            query=outcome.query,
            original_query=outcome.original_query,
            case_analysis=outcome.case_analysis.to_dict() if outcome.case_analysis else None,
            total=len(outcome.experts),
            experts=outcome.experts,
        )


class ContactInfoDTO(CamelDTO):
    emails: list[str] = Field(default_factory=list)
    phones: list[str] = Field(default_factory=list)
    websites: list[str] = Field(default_factory=list)


class WebSearchResultDTO(CamelDTO):
    id: str
    url: str
    title: str | None = None
    author: str | None = None
    published_date: str | None = None
    text: str | None = None
    highlights: list[str] | None = None
    highlight_scores: list[float] | None = None
    # Left as None (and dropped from the JSON) unless extraction was requested
    contact_info: ContactInfoDTO | None = None


class WebSearchResponseDTO(CamelDTO):
    results: list[WebSearchResultDTO]
    autoprompt_string: str | None = None

    @classmethod
    def from_web_search_response(cls, response):
        """Convert a tools.web WebSearchResponse to DTO."""
        return cls(
            results=[
                WebSearchResultDTO(
                    id=r.id,
                    url=r.url,
                    title=r.title,
                    author=r.author,
                    published_date=r.published_date,
                    text=r.text,
                    highlights=r.highlights,
                    highlight_scores=r.highlight_scores,
                    contact_info=(
                        ContactInfoDTO(
                            emails=r.contact_info.emails,
                            phones=r.contact_info.phones,
                            websites=r.contact_info.websites,
                        )
                        if r.contact_info is not None
                        else None
                    ),
                )
                for r in response.results
            ],
            autoprompt_string=response.autoprompt_string,
        )


class ErrorResponseDTO(BaseModel):
    error: str
    details: str | None = None


class HealthResponseDTO(BaseModel):
    status: str
    timestamp: str
    version: str = "1.0.0"
