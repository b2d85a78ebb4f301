"""
Realtime change feed for user_accounts over Postgres LISTEN/NOTIFY.

The database trigger publishes on `user_accounts_changes` with a JSON payload:
    {"type": "INSERT" | "UPDATE" | "DELETE", "record": {...}, "old_record": {...}}
`eventType` is accepted in place of `type`.

Usage:
    feed = UserAccountsFeed()
    async for event in feed:
        await console.handle_change(event)
"""

import json
from collections.abc import AsyncIterator

import psycopg
from psycopg import sql

from networknote.config import settings
from networknote.errors import PersistenceFailure
from networknote.infrastructure.observability.logging import get_logger
from networknote.models.domain.directory_domain import ChangeEvent, ChangeEventType

logger = get_logger(__name__)

CHANNEL = "user_accounts_changes"


def parse_change_event(payload: str) -> ChangeEvent | None:
    """Decode a NOTIFY payload; None for anything that is not a known change."""
    try:
        data = json.loads(payload)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed change payload", payload=str(payload)[:200])
        return None

    if not isinstance(data, dict):
        return None

    event_type = str(data.get("type") or data.get("eventType") or "").upper()
    if event_type not in ChangeEventType.__members__:
        logger.warning("Ignoring unknown change type", event_type=event_type)
        return None

    return ChangeEvent(
        event_type=ChangeEventType(event_type),
        record=data.get("record") or data.get("new") or {},
        old_record=data.get("old_record") or data.get("old") or {},
    )


class UserAccountsFeed:
    """Async iterator of ChangeEvents from a dedicated LISTEN connection."""

    def __init__(self, conninfo: str | None = None, channel: str = CHANNEL):
        self.conninfo = conninfo or settings.SUPABASE_DB_URL
        self.channel = channel
        self._conn: psycopg.AsyncConnection | None = None

    async def connect(self) -> None:
        try:
            self._conn = await psycopg.AsyncConnection.connect(self.conninfo, autocommit=True)
            await self._conn.execute(
                sql.SQL("LISTEN {}").format(sql.Identifier(self.channel))
            )
        except psycopg.Error as e:
            logger.error("Failed to subscribe to change feed", channel=self.channel, error=str(e))
            raise PersistenceFailure(f"Realtime subscription failed: {e}", operation="listen") from e

        logger.info("Subscribed to change feed", channel=self.channel)

    async def close(self) -> None:
        if self._conn is not None:
            await self._conn.close()
            self._conn = None
            logger.info("Unsubscribed from change feed", channel=self.channel)

    async def __aiter__(self) -> AsyncIterator[ChangeEvent]:
        if self._conn is None:
            await self.connect()
        try:
            async for notify in self._conn.notifies():
                event = parse_change_event(notify.payload)
                if event is not None:
                    yield event
        except psycopg.Error as e:
            logger.error("Change feed interrupted", channel=self.channel, error=str(e))
            raise PersistenceFailure(f"Realtime feed interrupted: {e}", operation="notifies") from e
        finally:
            await self.close()
