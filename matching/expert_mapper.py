from collections.abc import Mapping
from typing import Any

from server.schemas.responses import ExpertResult

DEFAULT_DESCRIPTION = "Professional expert witness with extensive experience."
DEFAULT_LOCATION = "United States"
DEFAULT_LANGUAGES = ["English"]
CONTACT_STATUSES = {"green", "yellow", "red"}


def _number_text(value: Any) -> str:
    # Postgres NUMERIC arrives as Decimal; render 250.00 as "250"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if hasattr(value, "normalize") and hasattr(value, "as_tuple"):
        return format(value.normalize(), "f")
    return str(value)


def to_expert_result(record: Mapping[str, Any]) -> ExpertResult:
    """
    Map a directory row onto the client-facing ExpertResult.

    Pure: the record is only read. Availability mirrors the active flag.
    """
    is_active = bool(record.get("is_active"))
    years = record.get("years_of_experience") or 0
    hourly_rate = record.get("hourly_rate") or 0
    case_count = record.get("case_count") or 0
    contact_status = record.get("contact_status") or "red"

    return ExpertResult(
        id=record.get("id"),
        name=record.get("full_name"),
        specialty=record.get("specialization"),
        category=record.get("specialization"),
        description=record.get("bio") or DEFAULT_DESCRIPTION,
        location=record.get("location") or DEFAULT_LOCATION,
        experience=f"{years} years",
        rate=f"${_number_text(hourly_rate)}/hr",
        rating=record.get("rating") or 0,
        reviews=record.get("review_count") or 0,
        case_count=case_count,
        languages=list(record.get("languages") or DEFAULT_LANGUAGES),
        certifications=list(record.get("certifications") or []),
        education=list(record.get("education") or []),
        availability="Available" if is_active else "Unavailable",
        availability_color="green" if is_active else "gray",
        contact_status=contact_status if contact_status in CONTACT_STATUSES else "red",
        contact_email=record.get("contact_email"),
        contact_phone=record.get("contact_phone"),
        linkedin_url=record.get("linkedin_url"),
        profile_url=record.get("profile_url"),
        tags=[
            tag
            for tag in (
                record.get("specialization"),
                f"{case_count}+ Cases",
                f"{years} Years",
            )
            if tag
        ],
    )
