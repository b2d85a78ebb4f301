"""
Tests for the deterministic HR email fallback.
"""

import pytest

from networknote.services.generation.fallback import (
    GENERIC_BULLET,
    build_fallback_hr_email,
    split_key_points,
)


def test_scenario_key_points_become_intro_and_bullets():
    email = build_fallback_hr_email("Jane Doe", "Acme", "Led 3 product launches\nManaged a team of 5")
    groups = email.split("\n\n")

    assert groups[1] == "Hi Jane,"
    assert groups[2] == "Led 3 product launches"
    assert "- Managed a team of 5" in groups[3].split("\n")


def test_empty_key_points_use_generic_text():
    email = build_fallback_hr_email("Jane Doe", "Acme", "")
    assert "I'm reaching out about potential opportunities with Acme" in email
    assert GENERIC_BULLET in email
    assert GENERIC_BULLET.startswith("- Experienced professional")


@pytest.mark.parametrize("company", ["Acme", "Globex Corp", "Ünïcode & Co", ""])
def test_subject_line_names_company(company):
    email = build_fallback_hr_email("Jane Doe", company, "One\nTwo")
    assert email.split("\n")[0] == f"Subject: Exploring opportunities with {company}"


def test_deterministic():
    args = ("Jane Doe", "Acme", "Led 3 product launches\r\nManaged a team of 5\n\n")
    assert build_fallback_hr_email(*args) == build_fallback_hr_email(*args)


def test_key_points_trimmed_and_blank_lines_dropped():
    assert split_key_points("  first \r\n\n second\n   \n") == ["first", "second"]


def test_single_name_token_greeting():
    assert "Hi Cher," in build_fallback_hr_email("Cher", "Acme", "x")


def test_sign_off_placeholders():
    lines = build_fallback_hr_email("Jane Doe", "Acme", "x").split("\n")
    assert lines[-3:] == ["Best regards,", "[Your Name]", "[Your Contact Information]"]
