"""
Per-feature preview state.

Each generation takes a ticket; a response that arrives after the panel was
closed or after a newer request started is discarded instead of applied.
"""

from itertools import count

from networknote.errors import GenerationProxyFailure, NetworkNoteError
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.domain.outreach_domain import (
    Feature,
    GeneratedText,
    GenerationSource,
    OutreachRequest,
)
from networknote.services.generation.protocol import OutreachGenerator
from networknote.services.notifications import NotificationChannel

logger = get_logger(__name__)

SUCCESS_MESSAGES = {
    Feature.LINKEDIN_NOTE: "LinkedIn note generated",
    Feature.COLD_EMAIL: "Cold email generated",
    Feature.HR_EMAIL: "Email generated",
}


class OutreachPanel:
    def __init__(
        self,
        feature: Feature,
        generator: OutreachGenerator,
        notifier: NotificationChannel | None = None,
    ):
        self.feature = feature
        self.generator = generator
        self.notifier = notifier or NotificationChannel()
        self.result: GeneratedText | None = None
        self.loading = False
        self.is_open = True
        self._tickets = count(1)
        self._current_ticket = 0

    def close(self) -> None:
        self.is_open = False
        self.loading = False

    def reset(self) -> None:
        self.result = None

    def _is_current(self, ticket: int) -> bool:
        return self.is_open and ticket == self._current_ticket

    async def generate(self, request: OutreachRequest) -> GeneratedText | None:
        ticket = next(self._tickets)
        self._current_ticket = ticket
        self.loading = True

        try:
            result = await self.generator.generate(self.feature, request)
        except GenerationProxyFailure as e:
            if self._is_current(ticket):
                self.loading = False
                self.notifier.notify("Error", e.message or "Failed to generate", "destructive")
            else:
                logger.info("Discarded stale generation failure", feature=self.feature.value)
            return None
        except NetworkNoteError as e:
            # ValidationError lands here too
            if self._is_current(ticket):
                self.loading = False
                self.notifier.error(e)
            return None

        if not self._is_current(ticket):
            logger.info("Discarded stale generation result", feature=self.feature.value, ticket=ticket)
            return None

        self.loading = False
        self.result = result
        if result.source == GenerationSource.PROXY:
            self.notifier.notify("Success!", SUCCESS_MESSAGES[self.feature])
        return result
