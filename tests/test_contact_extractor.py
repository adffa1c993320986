from tools.web.contact_extractor import (
    build_contact_text,
    extract_contact_info,
    extract_emails,
    extract_phones,
    extract_websites,
)

PAGE = (
    "Contact Jane Doe at jane@realfirm.com or jane@example.com. "
    "Office: (555) 123-4567, ext 555-1234. "
    "Visit https://www.realfirm.com/experts for details or https://realfirm.com/contact now. "
    "Template: info@domain.com, qa@test.com. Again: jane@realfirm.com"
)


def test_placeholder_domains_are_dropped():
    emails = extract_emails(PAGE)
    assert "jane@realfirm.com" in emails
    assert "jane@example.com" not in emails
    assert "info@domain.com" not in emails
    assert "qa@test.com" not in emails


def test_emails_are_deduplicated_in_first_seen_order():
    assert extract_emails("a@firm.org b@firm.org a@firm.org") == ["a@firm.org", "b@firm.org"]


def test_short_phone_numbers_are_rejected():
    phones = extract_phones("Call (555) 123-4567 or 555-1234")
    assert phones == ["(555) 123-4567"]


def test_phone_with_country_code_is_kept():
    phones = extract_phones("Direct line +1 312.555.0142")
    assert len(phones) == 1
    assert phones[0].endswith("312.555.0142")


def test_websites_are_extracted_and_deduplicated():
    text = "See https://realfirm.com/team and http://expert.io/cv and https://realfirm.com/team "
    assert extract_websites(text) == ["https://realfirm.com/team", "http://expert.io/cv"]


def test_extraction_is_deterministic():
    first = extract_contact_info(PAGE)
    second = extract_contact_info(PAGE)
    assert first == second
    assert first.emails == ["jane@realfirm.com"]
    assert first.phones == ["(555) 123-4567"]
    assert "https://www.realfirm.com/experts" in first.websites


def test_empty_text_yields_empty_lists():
    info = extract_contact_info(None)
    assert info.emails == [] and info.phones == [] and info.websites == []


def test_build_contact_text_joins_text_and_highlights():
    combined = build_contact_text("body", ["one", "two"])
    assert combined == "body one two"
    assert build_contact_text(None, None) == " "
