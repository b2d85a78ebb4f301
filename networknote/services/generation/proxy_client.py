"""
Client for the generate-* proxy endpoints.

Stateless request/response: one POST per generation, JSON body in,
`{<resultField>: string}` out. Every unusable outcome is a GenerationProxyFailure.
"""

from typing import Any

import httpx

from networknote.config import settings
from networknote.errors import GenerationProxyFailure
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.domain.outreach_domain import Feature

logger = get_logger(__name__)


class GenerationProxyClient:
    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.functions_url()).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.SUPABASE_ANON_KEY
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def invoke(self, feature: Feature, body: dict[str, Any]) -> str:
        url = f"{self.base_url}/{feature.endpoint}"
        try:
            # No client-side timeout: only explicit errors trigger the fallback
            async with httpx.AsyncClient(timeout=None, transport=self._transport) as client:
                response = await client.post(url, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning(
                "Generation proxy request failed",
                feature=feature.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise GenerationProxyFailure(
                f"Generation service unreachable: {e}", feature=feature.value
            ) from e

        if not response.is_success:
            detail = _error_detail(response)
            logger.warning(
                "Generation proxy returned error status",
                feature=feature.value,
                status_code=response.status_code,
                error=detail,
            )
            raise GenerationProxyFailure(
                detail or f"Generation failed with status {response.status_code}",
                feature=feature.value,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise GenerationProxyFailure(
                "Malformed response from the generation service", feature=feature.value
            ) from e

        result = payload.get(feature.result_field) if isinstance(payload, dict) else None
        if not isinstance(result, str):
            raise GenerationProxyFailure(
                f"Response is missing the '{feature.result_field}' field", feature=feature.value
            )
        return result


def _error_detail(response: httpx.Response) -> str | None:
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        detail = data.get("error") or data.get("detail")
        return str(detail) if detail else None
    return None
