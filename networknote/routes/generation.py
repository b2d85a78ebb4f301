"""
generation.py
-------------
Purpose:
    User-facing outreach generation for signed-in users of any role.

    - Runs the generation protocol: validate, call the proxy, fall back
      where a fallback is registered (HR email only).
    - Returns the text plus compose links: mail links for emails, a
      LinkedIn people search for notes.
"""

from fastapi import APIRouter, Depends

from networknote.auth.verify import SessionContext, signed_in
from networknote.models.api.outreach_request import ColdEmailBody, HREmailBody, LinkedInNoteBody
from networknote.models.api.outreach_response import GenerationResponse, MailLinks
from networknote.models.domain.outreach_domain import (
    Feature,
    GeneratedText,
    GenerationSource,
    OutreachRequest,
)
from networknote.services.generation import OutreachGenerator, get_outreach_generator
from networknote.services.generation.mail_links import (
    build_gmail_compose_url,
    build_linkedin_search_url,
    build_mailto_url,
    split_subject,
)
from networknote.services.generation.panel import SUCCESS_MESSAGES
from networknote.services.notifications import NotificationChannel

router = APIRouter(prefix="/generate", tags=["generation"])


def _mail_links(text: str, to: str = "") -> MailLinks:
    subject, body = split_subject(text)
    return MailLinks(
        subject=subject,
        body=body,
        mailto_url=build_mailto_url(to, subject, body),
        gmail_url=build_gmail_compose_url(to, subject, body),
    )


async def _run(
    feature: Feature, request: OutreachRequest, generator: OutreachGenerator
) -> tuple[GeneratedText, NotificationChannel]:
    notifier = NotificationChannel()
    # Errors propagate to the app's exception handlers
    result = await generator.generate(feature, request)
    if result.source == GenerationSource.PROXY:
        notifier.notify("Success!", SUCCESS_MESSAGES[feature])
    return result, notifier


def _response(result: GeneratedText, notifier: NotificationChannel, **links) -> GenerationResponse:
    return GenerationResponse(
        feature=result.feature,
        text=result.text,
        source=result.source,
        character_count=result.character_count,
        notifications=notifier.drain(),
        **links,
    )


@router.post("/linkedin-note", response_model=GenerationResponse)
async def linkedin_note(
    body: LinkedInNoteBody,
    _session: SessionContext = Depends(signed_in),
    generator: OutreachGenerator = Depends(get_outreach_generator),
):
    request = body.to_domain()
    result, notifier = await _run(Feature.LINKEDIN_NOTE, request, generator)
    return _response(
        result, notifier, search_url=build_linkedin_search_url(request.intent, request.form_data)
    )


@router.post("/cold-email", response_model=GenerationResponse)
async def cold_email(
    body: ColdEmailBody,
    _session: SessionContext = Depends(signed_in),
    generator: OutreachGenerator = Depends(get_outreach_generator),
):
    result, notifier = await _run(Feature.COLD_EMAIL, body.to_domain(), generator)
    return _response(result, notifier, mail=_mail_links(result.text))


@router.post("/hr-email", response_model=GenerationResponse)
async def hr_email(
    body: HREmailBody,
    _session: SessionContext = Depends(signed_in),
    generator: OutreachGenerator = Depends(get_outreach_generator),
):
    result, notifier = await _run(Feature.HR_EMAIL, body.to_domain(), generator)
    return _response(result, notifier, mail=_mail_links(result.text, body.hr_email or ""))
