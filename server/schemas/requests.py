"""Pydantic request models for FastAPI endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# "No preference" values sent by the search form
SPECIALTY_SENTINELS = {"All Specialties"}
AVAILABILITY_SENTINELS = {"Any Time"}
TRIAL_TESTIMONY_REQUIRED = {"yes", "true", "required"}
TRIAL_TESTIMONY_NOT_REQUIRED = {"", "no", "false", "not required"}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchRequest(CamelModel):
    query: str | None = None
    case_description: str | None = None
    specialty: str | None = None
    location: str | None = None
    availability: str | None = None
    min_experience: float | None = Field(None, ge=0)
    max_experience: float | None = Field(None, ge=0)
    trial_testimony: bool = False
    min_rate: float | None = Field(None, ge=0)
    max_rate: float | None = Field(None, ge=0)
    languages: list[str] = Field(default_factory=list)
    certifications: str | None = None

    @field_validator(
        "query",
        "case_description",
        "location",
        "certifications",
        "min_experience",
        "max_experience",
        "min_rate",
        "max_rate",
        mode="before",
    )
    @classmethod
    def blank_means_absent(cls, value):
        return _blank_to_none(value)

    @field_validator("location", "certifications")
    @classmethod
    def strip_text(cls, value):
        return value.strip() if value else value

    @field_validator("specialty", mode="before")
    @classmethod
    def normalize_specialty(cls, value):
        value = _blank_to_none(value)
        if value in SPECIALTY_SENTINELS:
            return None
        return value

    @field_validator("availability", mode="before")
    @classmethod
    def normalize_availability(cls, value):
        value = _blank_to_none(value)
        if value in AVAILABILITY_SENTINELS:
            return None
        return value

    @field_validator("trial_testimony", mode="before")
    @classmethod
    def normalize_trial_testimony(cls, value):
        if value is None or isinstance(value, bool):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in TRIAL_TESTIMONY_REQUIRED:
                return True
            if lowered in TRIAL_TESTIMONY_NOT_REQUIRED:
                return False
        raise ValueError("trialTestimony must be 'yes', 'no' or empty")

    @field_validator("languages", mode="before")
    @classmethod
    def normalize_languages(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, list):
            return [item.strip() for item in value if isinstance(item, str) and item.strip()]
        return value

    @property
    def has_search_text(self) -> bool:
        return bool(self.query and self.query.strip()) or bool(
            self.case_description and self.case_description.strip()
        )


class WebSearchRequest(CamelModel):
    query: str | None = None
    num_results: int = Field(10, ge=1, le=100)
    use_autoprompt: bool = True
    extract_contacts: bool = False
