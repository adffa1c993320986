"""Structured legal-matter metadata extracted from a free-text case description."""

from dataclasses import dataclass, field
from typing import Any

from models.errors import CompletionParseError

_LIST_FIELDS = {
    "expertise_needed": "expertiseNeeded",
    "key_issues": "keyIssues",
    "suggested_specialties": "suggestedSpecialties",
}
_TEXT_FIELDS = {
    "core_conflict": "coreConflict",
    "case_type": "caseType",
    "jurisdiction": "jurisdiction",
}


def _clean_text(value: Any, key: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise CompletionParseError(f"Field '{key}' must be a string")
    return str(value).strip()


def _clean_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise CompletionParseError(f"Field '{key}' must be a list of strings")
    # Models pad lists with nulls and nested junk; keep only usable strings
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


@dataclass(frozen=True)
class CaseAnalysis:
    core_conflict: str = ""
    expertise_needed: list[str] = field(default_factory=list)
    case_type: str = ""
    jurisdiction: str | None = None
    key_issues: list[str] = field(default_factory=list)
    suggested_specialties: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> "CaseAnalysis":
        """
        Build a CaseAnalysis from untrusted model JSON.

        Raises:
            CompletionParseError: If the payload is not an object, a field has
                an unusable type, or no known field is present at all.
        """
        if not isinstance(payload, dict):
            raise CompletionParseError("Case analysis must be a JSON object")

        known = set(_LIST_FIELDS.values()) | set(_TEXT_FIELDS.values())
        if not known.intersection(payload):
            raise CompletionParseError("Case analysis has none of the expected fields")

        values: dict[str, Any] = {}
        for attr, key in _TEXT_FIELDS.items():
            values[attr] = _clean_text(payload.get(key), key)
        for attr, key in _LIST_FIELDS.items():
            values[attr] = _clean_list(payload.get(key), key)

        values["jurisdiction"] = values["jurisdiction"] or None
        return cls(**values)

    def search_terms(self) -> str:
        """Space-joined terms used to enrich the free-text directory query."""
        terms = [
            self.core_conflict,
            *self.expertise_needed,
            *self.key_issues,
            *self.suggested_specialties,
        ]
        return " ".join(term for term in terms if term)

    def to_dict(self) -> dict[str, Any]:
        return {
            "coreConflict": self.core_conflict,
            "expertiseNeeded": list(self.expertise_needed),
            "caseType": self.case_type,
            "jurisdiction": self.jurisdiction,
            "keyIssues": list(self.key_issues),
            "suggestedSpecialties": list(self.suggested_specialties),
        }
