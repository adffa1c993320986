"""Data contracts for the web search proxy."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContactInfo:
    """Contact details pulled out of free text. Lists keep first-seen order."""

    emails: list[str] = field(default_factory=list)
    phones: list[str] = field(default_factory=list)
    websites: list[str] = field(default_factory=list)


@dataclass
class WebSearchResult:
    """One result from the content-search provider."""

    id: str
    url: str
    title: str | None = None
    author: str | None = None
    published_date: str | None = None
    text: str | None = None
    highlights: list[str] | None = None
    highlight_scores: list[float] | None = None
    contact_info: ContactInfo | None = None  # None means extraction was not requested


@dataclass
class WebSearchResponse:
    """Provider results plus the provider's rewritten query, if any."""

    results: list[WebSearchResult] = field(default_factory=list)
    autoprompt_string: str | None = None
