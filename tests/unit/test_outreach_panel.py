"""
Tests for per-feature preview state and stale-response handling.
"""

import asyncio

import pytest

from networknote.errors import GenerationProxyFailure
from networknote.models.domain.outreach_domain import (
    ColdEmailRequest,
    Feature,
    GeneratedText,
    GenerationSource,
    HREmailRequest,
)
from networknote.services.generation.panel import OutreachPanel
from networknote.services.generation.protocol import OutreachGenerator
from networknote.services.notifications import NotificationChannel


class GatedProxy:
    """Proxy whose calls block until released, one event per call."""

    def __init__(self):
        self.gates: list[asyncio.Event] = []

    async def invoke(self, feature, body):
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return f"text for {body['keyPoints']}"


class FailingProxy:
    async def invoke(self, feature, body):
        raise GenerationProxyFailure("upstream down", feature=feature.value)


async def wait_for_calls(proxy: GatedProxy, n: int) -> None:
    while len(proxy.gates) < n:
        await asyncio.sleep(0)


@pytest.mark.asyncio
async def test_success_sets_result_and_notifies():
    notifier = NotificationChannel()
    proxy = GatedProxy()
    panel = OutreachPanel(Feature.COLD_EMAIL, OutreachGenerator(proxy=proxy), notifier)

    task = asyncio.create_task(panel.generate(ColdEmailRequest(key_points="one")))
    await wait_for_calls(proxy, 1)
    assert panel.loading
    proxy.gates[0].set()
    result = await task

    assert result.text == "text for one"
    assert panel.result == result
    assert not panel.loading
    assert notifier.pending[-1].title == "Success!"
    assert notifier.pending[-1].description == "Cold email generated"


@pytest.mark.asyncio
async def test_older_response_is_discarded():
    proxy = GatedProxy()
    panel = OutreachPanel(Feature.COLD_EMAIL, OutreachGenerator(proxy=proxy))

    first = asyncio.create_task(panel.generate(ColdEmailRequest(key_points="first")))
    await wait_for_calls(proxy, 1)
    second = asyncio.create_task(panel.generate(ColdEmailRequest(key_points="second")))
    await wait_for_calls(proxy, 2)

    proxy.gates[1].set()
    assert (await second).text == "text for second"

    proxy.gates[0].set()
    assert await first is None
    assert panel.result.text == "text for second"


@pytest.mark.asyncio
async def test_response_after_close_is_discarded():
    notifier = NotificationChannel()
    proxy = GatedProxy()
    panel = OutreachPanel(Feature.COLD_EMAIL, OutreachGenerator(proxy=proxy), notifier)

    task = asyncio.create_task(panel.generate(ColdEmailRequest(key_points="one")))
    await wait_for_calls(proxy, 1)
    panel.close()
    proxy.gates[0].set()

    assert await task is None
    assert panel.result is None
    assert notifier.pending == []


@pytest.mark.asyncio
async def test_failure_notifies_destructive():
    notifier = NotificationChannel()
    panel = OutreachPanel(Feature.COLD_EMAIL, OutreachGenerator(proxy=FailingProxy()), notifier)

    assert await panel.generate(ColdEmailRequest(key_points="x")) is None
    assert notifier.pending[-1].variant == "destructive"
    assert notifier.pending[-1].description == "upstream down"
    assert not panel.loading


@pytest.mark.asyncio
async def test_fallback_result_shown_without_success_notice():
    notifier = NotificationChannel()
    panel = OutreachPanel(Feature.HR_EMAIL, OutreachGenerator(proxy=FailingProxy()), notifier)

    result = await panel.generate(
        HREmailRequest(hr_name="Jane Doe", company_name="Acme", key_points="Led launches")
    )

    assert result.source == GenerationSource.FALLBACK
    assert panel.result == result
    assert notifier.pending == []


@pytest.mark.asyncio
async def test_validation_error_notifies():
    notifier = NotificationChannel()
    panel = OutreachPanel(Feature.HR_EMAIL, OutreachGenerator(proxy=FailingProxy()), notifier)

    assert await panel.generate(HREmailRequest()) is None
    assert notifier.pending[-1].title == "Missing fields"


def test_reset_clears_result():
    panel = OutreachPanel(Feature.COLD_EMAIL, OutreachGenerator(proxy=FailingProxy()))
    panel.result = GeneratedText(feature=Feature.COLD_EMAIL, text="x")
    panel.reset()
    assert panel.result is None
