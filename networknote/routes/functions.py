"""
Text-generation proxy endpoints backed by the AI gateway.

Response contract: `{"note": ...}` or `{"email": ...}` on success,
`{"error": message}` with status 500 on any failure.
Callers present the project key (`apikey` header or bearer) or a signed-in
session; anything else is 401.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from networknote.auth.verify import function_caller
from networknote.errors import GenerationProxyFailure
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.api.outreach_request import ColdEmailBody, HREmailBody, LinkedInNoteBody
from networknote.models.domain.outreach_domain import Feature
from networknote.services.generation.gateway import AIGatewayService, ai_gateway

router = APIRouter(
    prefix="/functions", tags=["functions"], dependencies=[Depends(function_caller)]
)
logger = get_logger(__name__)


def get_ai_gateway() -> AIGatewayService:
    return ai_gateway


def _failure(feature: Feature, error: GenerationProxyFailure) -> JSONResponse:
    logger.error("Generation function failed", feature=feature.value, error=error.message)
    return JSONResponse(status_code=500, content={"error": error.message})


@router.post(f"/{Feature.LINKEDIN_NOTE.endpoint}")
async def generate_linkedin_note(
    body: LinkedInNoteBody, gateway: AIGatewayService = Depends(get_ai_gateway)
):
    try:
        note = await gateway.linkedin_note(body.intent or "", body.form_data)
    except GenerationProxyFailure as e:
        return _failure(Feature.LINKEDIN_NOTE, e)
    return {"note": note}


@router.post(f"/{Feature.COLD_EMAIL.endpoint}")
async def generate_cold_email(
    body: ColdEmailBody, gateway: AIGatewayService = Depends(get_ai_gateway)
):
    try:
        email = await gateway.cold_email(body.key_points, body.resume)
    except GenerationProxyFailure as e:
        return _failure(Feature.COLD_EMAIL, e)
    return {"email": email}


@router.post(f"/{Feature.HR_EMAIL.endpoint}")
async def generate_hr_email(body: HREmailBody, gateway: AIGatewayService = Depends(get_ai_gateway)):
    try:
        email = await gateway.hr_email(
            body.hr_name, body.hr_position, body.company_name, body.key_points
        )
    except GenerationProxyFailure as e:
        return _failure(Feature.HR_EMAIL, e)
    return {"email": email}
