"""
Deterministic local fallbacks used when the generation proxy fails.

No network calls and no randomness: identical input always yields
byte-identical output.
"""

import re

from networknote.models.domain.outreach_domain import HREmailRequest

CLOSING_LINES = (
    "I would appreciate the chance to discuss how I can support your team.",
    "Please let me know if we could schedule a quick call at your convenience.",
)
GENERIC_BULLET = "- Experienced professional eager to contribute to your team"


def split_key_points(key_points: str) -> list[str]:
    return [line.strip() for line in re.split(r"\r?\n", key_points or "") if line.strip()]


def build_fallback_hr_email(contact_name: str, company_name: str, key_points: str) -> str:
    points = split_key_points(key_points)

    intro = (
        points[0]
        if points
        else f"I'm reaching out about potential opportunities with {company_name} "
        "and would appreciate a quick conversation."
    )
    bullets = "\n".join(f"- {point}" for point in points[1:]) or GENERIC_BULLET

    name_tokens = contact_name.split()
    first_name = name_tokens[0] if name_tokens else contact_name

    return "\n".join(
        [
            f"Subject: Exploring opportunities with {company_name}",
            "",
            f"Hi {first_name},",
            "",
            intro,
            "",
            "Key highlights:",
            bullets,
            "",
            *CLOSING_LINES,
            "",
            "Thank you for your time and consideration.",
            "",
            "Best regards,",
            "[Your Name]",
            "[Your Contact Information]",
        ]
    )


def fallback_for_hr_request(request: HREmailRequest) -> str:
    return build_fallback_hr_email(request.hr_name, request.company_name, request.key_points)
