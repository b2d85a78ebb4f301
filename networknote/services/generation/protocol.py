"""
Generation request/fallback protocol shared by all three outreach features.

    1. Validate required fields (ValidationError, no external call).
    2. One call to the feature's proxy endpoint; trimmed text is the result.
    3. Empty text counts as a proxy failure.
    4. On proxy failure, use the feature's registered fallback if it has one,
       otherwise re-raise GenerationProxyFailure.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from networknote.config import settings
from networknote.errors import GenerationProxyFailure, ValidationError
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.domain.outreach_domain import (
    Feature,
    GeneratedText,
    GenerationSource,
    OutreachRequest,
)
from networknote.services.generation.fallback import fallback_for_hr_request
from networknote.services.generation.proxy_client import GenerationProxyClient

logger = get_logger(__name__)

Fallback = Callable[[Any], str]

# Only the HR email has a local fallback; the other features surface the error.
DEFAULT_FALLBACKS: dict[Feature, Fallback] = {
    Feature.HR_EMAIL: fallback_for_hr_request,
}


class OutreachGenerator:
    def __init__(
        self,
        proxy: GenerationProxyClient | None = None,
        fallbacks: dict[Feature, Fallback] | None = None,
        timeout_seconds: float | None = None,
    ):
        self.proxy = proxy or GenerationProxyClient()
        self.fallbacks = dict(DEFAULT_FALLBACKS if fallbacks is None else fallbacks)
        self.timeout_seconds = timeout_seconds

    async def _call_proxy(self, feature: Feature, request: OutreachRequest) -> str:
        call = self.proxy.invoke(feature, request.to_proxy_body())
        if self.timeout_seconds is None:
            raw = await call
        else:
            try:
                raw = await asyncio.wait_for(call, timeout=self.timeout_seconds)
            except TimeoutError as e:
                raise GenerationProxyFailure(
                    f"Generation timed out after {self.timeout_seconds}s", feature=feature.value
                ) from e

        text = raw.strip()
        if not text:
            raise GenerationProxyFailure(
                "Content missing from the AI service", feature=feature.value
            )
        return text

    async def generate(self, feature: Feature, request: OutreachRequest) -> GeneratedText:
        missing = request.missing_fields()
        if missing:
            logger.info("Generation rejected, missing fields", feature=feature.value, missing=missing)
            raise ValidationError.for_missing(missing)

        try:
            text = await self._call_proxy(feature, request)
        except GenerationProxyFailure as e:
            fallback = self.fallbacks.get(feature)
            if fallback is None:
                logger.error("Generation failed", feature=feature.value, error=e.message)
                raise

            logger.warning(
                "Generation proxy failed, using local fallback",
                feature=feature.value,
                error=e.message,
            )
            return GeneratedText(
                feature=feature, text=fallback(request), source=GenerationSource.FALLBACK
            )

        logger.info("Generation succeeded", feature=feature.value, length=len(text))
        return GeneratedText(feature=feature, text=text, source=GenerationSource.PROXY)


_generator: OutreachGenerator | None = None


def get_outreach_generator() -> OutreachGenerator:
    global _generator
    if _generator is None:
        _generator = OutreachGenerator(timeout_seconds=settings.GENERATION_TIMEOUT_SECONDS)
    return _generator
