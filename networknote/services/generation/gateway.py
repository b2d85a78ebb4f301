"""
AI gateway service backing the generate-* endpoints.
Calls an OpenAI-compatible chat-completions API (the Lovable AI gateway by default).
"""

from typing import Any

import openai
from openai import AsyncOpenAI

from networknote.config import settings
from networknote.errors import GenerationProxyFailure
from networknote.infrastructure.observability.logging import get_logger
from networknote.services.generation import prompts

logger = get_logger(__name__)


class AIGatewayService:
    """Thin async wrapper: one chat completion per request, no streaming, no retries."""

    def __init__(self, client: AsyncOpenAI | None = None):
        self.client = client

    def _get_client(self) -> AsyncOpenAI:
        if self.client is None:
            if not settings.AI_GATEWAY_API_KEY:
                raise GenerationProxyFailure("AI_GATEWAY_API_KEY not configured")
            self.client = AsyncOpenAI(
                api_key=settings.AI_GATEWAY_API_KEY,
                base_url=settings.AI_GATEWAY_URL,
            )
            logger.info("AI gateway client initialized", model=settings.AI_MODEL)
        return self.client

    async def complete(self, system_prompt: str, user_prompt: str, feature: str) -> str:
        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=settings.AI_MODEL,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except openai.APIStatusError as e:
            logger.error(
                "AI gateway returned an error status",
                feature=feature,
                status_code=e.status_code,
                error=str(e),
            )
            raise GenerationProxyFailure(
                f"AI gateway error: {e}", feature=feature, status_code=e.status_code
            ) from e
        except openai.OpenAIError as e:
            logger.error("AI gateway call failed", feature=feature, error=str(e))
            raise GenerationProxyFailure(f"AI gateway error: {e}", feature=feature) from e

        if not response.choices or not response.choices[0].message.content:
            raise GenerationProxyFailure("Empty response from AI gateway", feature=feature)

        content = response.choices[0].message.content
        logger.info(
            "AI gateway completion succeeded",
            feature=feature,
            response_length=len(content),
            usage_tokens=response.usage.total_tokens if response.usage else 0,
        )
        return content

    async def linkedin_note(self, intent: str, form_data: dict[str, Any]) -> str:
        return await self.complete(
            prompts.LINKEDIN_SYSTEM_PROMPT,
            prompts.linkedin_user_prompt(intent, form_data),
            feature="linkedin-note",
        )

    async def cold_email(self, key_points: str, resume: str = "") -> str:
        return await self.complete(
            prompts.COLD_EMAIL_SYSTEM_PROMPT,
            prompts.cold_email_user_prompt(key_points, resume),
            feature="cold-email",
        )

    async def hr_email(
        self, hr_name: str, hr_position: str, company_name: str, key_points: str
    ) -> str:
        return await self.complete(
            prompts.HR_EMAIL_SYSTEM_PROMPT,
            prompts.hr_email_user_prompt(hr_name, hr_position, company_name, key_points),
            feature="hr-email",
        )


ai_gateway = AIGatewayService()
