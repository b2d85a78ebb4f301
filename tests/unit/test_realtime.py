import json

import pytest

from networknote.db.realtime import parse_change_event
from networknote.models.domain.directory_domain import ChangeEventType


def test_parses_type_and_records():
    event = parse_change_event(
        json.dumps({"type": "UPDATE", "record": {"id": "u1"}, "old_record": {"id": "u1", "status": "unpaid"}})
    )
    assert event.event_type == ChangeEventType.UPDATE
    assert event.record == {"id": "u1"}
    assert event.old_record["status"] == "unpaid"


def test_accepts_event_type_alias_and_lowercase():
    event = parse_change_event(json.dumps({"eventType": "insert", "new": {"id": "u9"}}))
    assert event.event_type == ChangeEventType.INSERT
    assert event.record == {"id": "u9"}
    assert event.old_record == {}


@pytest.mark.parametrize(
    "payload",
    ["not json", "[1, 2]", json.dumps({"type": "TRUNCATE"}), json.dumps({}), None],
)
def test_unusable_payloads_ignored(payload):
    assert parse_change_event(payload) is None
