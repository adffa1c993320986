"""Best-effort contact extraction (emails, phones, websites) from web page text."""

import re

from .contracts import ContactInfo

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_PATTERN = re.compile(r"(?:\+?\d{1,3}[-.\s]?)?(?:\(?\d{3}\)?[-.\s]?)?\d{3}[-.\s]?\d{4}\b")
WEBSITE_PATTERN = re.compile(
    r"https?://(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"(?:[-a-zA-Z0-9()@:%_+.~#?&/=]*)"
)

# Placeholder domains that show up in templates and docs, never real contacts
PLACEHOLDER_EMAIL_DOMAINS = ("example.com", "domain.com", "test.com")
MIN_PHONE_DIGITS = 10


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def extract_emails(text: str) -> list[str]:
    return _unique(
        [
            email
            for email in EMAIL_PATTERN.findall(text)
            if not any(domain in email for domain in PLACEHOLDER_EMAIL_DOMAINS)
        ]
    )


def extract_phones(text: str) -> list[str]:
    # Matches can start with a separator or end short; digit count is the filter
    return _unique(
        [
            phone
            for phone in PHONE_PATTERN.findall(text)
            if len(re.sub(r"\D", "", phone)) >= MIN_PHONE_DIGITS
        ]
    )


def extract_websites(text: str) -> list[str]:
    return _unique(WEBSITE_PATTERN.findall(text))


def extract_contact_info(text: str | None) -> ContactInfo:
    """
    Extract candidate emails, phone numbers and URLs from free text.

    Heuristic only: no deliverability checks, no phone normalization, no URL
    resolution. Deterministic for a given input.
    """
    text = text or ""
    return ContactInfo(
        emails=extract_emails(text),
        phones=extract_phones(text),
        websites=extract_websites(text),
    )


def build_contact_text(text: str | None, highlights: list[str] | None) -> str:
    """Full text and highlights joined into one string for extraction."""
    return f"{text or ''} {' '.join(highlights or [])}"
