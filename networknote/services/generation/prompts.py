"""Prompt builders for the three generate-* endpoints."""

from typing import Any

LINKEDIN_SYSTEM_PROMPT = (
    "You are a professional LinkedIn networking assistant. "
    "Generate concise, professional LinkedIn notes under 150 characters."
)

COLD_EMAIL_SYSTEM_PROMPT = (
    "You are a professional with 10 years of experience writing concise cold emails "
    "for job seekers. Start the email with a line formatted as 'Subject: ...'."
)

HR_EMAIL_SYSTEM_PROMPT = (
    "You are a professional with 10 years of experience writing cold emails to HR professionals."
)


def linkedin_user_prompt(intent: str, form_data: dict[str, Any]) -> str:
    prompt = f"Generate a professional LinkedIn connection note for: {intent}. "
    for key, value in form_data.items():
        if value:
            prompt += f"{key}: {value}. "
    return prompt


def cold_email_user_prompt(key_points: str, resume: str = "") -> str:
    prompt = f"Write a professional cold email. Key points: {key_points}"
    if resume and resume.strip():
        prompt += f"\n\nResume:\n{resume.strip()}"
    return prompt


def hr_email_user_prompt(hr_name: str, hr_position: str, company_name: str, key_points: str) -> str:
    return (
        f"Write a professional cold email to {hr_name}, {hr_position} at {company_name}. "
        f"Key points: {key_points}"
    )
