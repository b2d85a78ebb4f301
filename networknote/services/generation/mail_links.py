"""Compose links for generated text: mail client, Gmail web compose, LinkedIn search."""

import re
from urllib.parse import quote, urlencode

from networknote.models.domain.outreach_domain import LinkedInIntent

DEFAULT_SUBJECT = "Following up on my application"
GMAIL_COMPOSE_URL = "https://mail.google.com/mail/"
LINKEDIN_SEARCH_URL = "https://www.linkedin.com/search/results/people/"

_SUBJECT_RE = re.compile(r"^subject:\s*", re.IGNORECASE)


def split_subject(text: str, default_subject: str = DEFAULT_SUBJECT) -> tuple[str, str]:
    """Pull the first `Subject:` line out of generated text; the rest is the body."""
    lines = text.split("\n")
    for index, line in enumerate(lines):
        stripped = line.strip()
        if _SUBJECT_RE.match(stripped):
            subject = _SUBJECT_RE.sub("", stripped, count=1)
            body = "\n".join(lines[index + 1 :]).strip()
            return subject, body
    return default_subject, text.strip()


def build_mailto_url(to: str, subject: str, body: str) -> str:
    return f"mailto:{to}?subject={quote(subject, safe='')}&body={quote(body, safe='')}"


def build_gmail_compose_url(to: str, subject: str, body: str) -> str:
    params = {"view": "cm", "fs": "1", "to": to, "su": subject}
    if body:
        params["body"] = body
    return f"{GMAIL_COMPOSE_URL}?{urlencode(params, quote_via=quote)}"


def build_linkedin_search_url(intent: LinkedInIntent | None, form_data: dict[str, str]) -> str:
    role = form_data.get("role") or form_data.get("jobFunction") or "hiring"
    company = form_data.get("company") or ""

    terms = [f'"{role}"', f'"{company}"']
    if intent in (LinkedInIntent.INTERVIEW, LinkedInIntent.CONNECTIONS):
        terms += ['"hiring"', '"talent"', '"acquisition"', '"HR"']
        if "qa" in role.lower() or "quality" in role.lower():
            terms += ['"quality assurance"', '"testing"']

    keywords = quote(" + ".join(terms), safe="")
    return f"{LINKEDIN_SEARCH_URL}?keywords={keywords}&origin=GLOBAL_SEARCH_HEADER"
