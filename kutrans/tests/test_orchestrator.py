"""翻译请求编排测试"""

import asyncio

import pytest

from kutrans.exceptions import ConfigurationError, ServiceError
from kutrans.orchestrator import TranslationOrchestrator
from kutrans.tests.conftest import FakeTranslate, make_result

API_KEY_MISSING_EN = "API Key is not configured. Please set it up in your deployment environment."
API_ERROR_TR = "API bağlantısı başarısız. Lütfen bağlantınızı ve API anahtarınızı kontrol edin."


async def _start(orchestrator, *args):
    task = asyncio.create_task(orchestrator.reconcile(*args))
    await asyncio.sleep(0)
    return task


@pytest.mark.asyncio
async def test_empty_input_clears_state_without_call(fake_translate):
    orchestrator = TranslationOrchestrator(fake_translate)
    orchestrator.result = make_result("old")
    orchestrator.error = "previous error"

    applied = await orchestrator.reconcile("   ", "ku", "en", "en")

    assert applied is False
    assert orchestrator.result is None
    assert orchestrator.error == ""
    assert orchestrator.is_loading is False
    assert fake_translate.calls == []


@pytest.mark.asyncio
async def test_successful_translation_applied(fake_translate):
    orchestrator = TranslationOrchestrator(fake_translate)

    applied = await orchestrator.reconcile("rojbaş", "ku", "en", "tr")

    assert applied is True
    assert orchestrator.result == make_result("rojbaş", "en")
    assert orchestrator.is_loading is False
    assert fake_translate.calls == [("rojbaş", "ku", "en", "tr")]


@pytest.mark.asyncio
async def test_duplicate_request_dispatched_once(fake_translate):
    """同一请求连续发出两次只调用一次外部服务"""
    orchestrator = TranslationOrchestrator(fake_translate)

    await orchestrator.reconcile("rojbaş", "ku", "en", "tr")
    await orchestrator.reconcile("rojbaş", "ku", "en", "tr")

    assert len(fake_translate.calls) == 1
    assert orchestrator.metrics.get_metrics()["suppressed"] == 1


@pytest.mark.asyncio
async def test_any_changed_field_dispatches_again(fake_translate):
    orchestrator = TranslationOrchestrator(fake_translate)

    await orchestrator.reconcile("rojbaş", "ku", "en", "tr")
    await orchestrator.reconcile("rojbaş", "ku", "tr", "tr")
    await orchestrator.reconcile("rojbaş", "ku", "tr", "en")

    assert len(fake_translate.calls) == 3


@pytest.mark.asyncio
async def test_loading_state_while_in_flight(manual_translate):
    orchestrator = TranslationOrchestrator(manual_translate)
    orchestrator.error = "stale error"

    task = await _start(orchestrator, "silav", "ku", "tr", "tr")
    assert orchestrator.is_loading is True
    assert orchestrator.error == ""
    assert orchestrator.generation == 1

    manual_translate.resolve(0, make_result("silav", "tr"))
    await task
    assert orchestrator.is_loading is False


@pytest.mark.asyncio
async def test_later_request_wins_when_earlier_finishes_last(manual_translate):
    orchestrator = TranslationOrchestrator(manual_translate)

    first = await _start(orchestrator, "a", "ku", "en", "tr")
    second = await _start(orchestrator, "ab", "ku", "en", "tr")

    manual_translate.resolve(1, make_result("ab"))
    assert await second is True
    manual_translate.resolve(0, make_result("a"))
    assert await first is False

    assert orchestrator.result == make_result("ab")
    assert orchestrator.is_loading is False
    assert orchestrator.metrics.get_metrics()["stale"] == 1


@pytest.mark.asyncio
async def test_later_request_wins_when_earlier_finishes_first(manual_translate):
    orchestrator = TranslationOrchestrator(manual_translate)

    first = await _start(orchestrator, "a", "ku", "en", "tr")
    second = await _start(orchestrator, "ab", "ku", "en", "tr")

    manual_translate.resolve(0, make_result("a"))
    assert await first is False
    assert orchestrator.result is None
    assert orchestrator.is_loading is True

    manual_translate.resolve(1, make_result("ab"))
    await second
    assert orchestrator.result == make_result("ab")


@pytest.mark.asyncio
async def test_stale_failure_is_discarded(manual_translate):
    orchestrator = TranslationOrchestrator(manual_translate)

    first = await _start(orchestrator, "a", "ku", "en", "tr")
    second = await _start(orchestrator, "ab", "ku", "en", "tr")

    manual_translate.resolve(1, make_result("ab"))
    await second
    manual_translate.fail(0, ServiceError("timeout"))
    await first

    assert orchestrator.error == ""
    assert orchestrator.result == make_result("ab")


@pytest.mark.asyncio
async def test_configuration_error_shows_localized_message():
    translate = FakeTranslate(responder=lambda *args: ConfigurationError("API_KEY_MISSING"))
    orchestrator = TranslationOrchestrator(translate)
    orchestrator.result = make_result("old")

    await orchestrator.reconcile("rojbaş", "ku", "en", "en")

    assert orchestrator.error == API_KEY_MISSING_EN
    assert orchestrator.error_kind is ConfigurationError
    assert orchestrator.result is None
    assert orchestrator.is_loading is False


@pytest.mark.asyncio
async def test_unexpected_exception_is_service_error():
    translate = FakeTranslate(responder=lambda *args: RuntimeError("socket closed"))
    orchestrator = TranslationOrchestrator(translate)

    await orchestrator.reconcile("merhaba", "tr", "ku", "tr")

    assert orchestrator.error == API_ERROR_TR
    assert orchestrator.error_kind is ServiceError
    assert orchestrator.is_loading is False


@pytest.mark.asyncio
async def test_failed_request_can_be_retried():
    outcomes = [ServiceError("down"), make_result("merhaba", "ku")]
    translate = FakeTranslate(responder=lambda *args: outcomes.pop(0))
    orchestrator = TranslationOrchestrator(translate)

    await orchestrator.reconcile("merhaba", "tr", "ku", "tr")
    assert orchestrator.error
    await orchestrator.reconcile("merhaba", "tr", "ku", "tr")

    assert len(translate.calls) == 2
    assert orchestrator.error == ""
    assert orchestrator.result == make_result("merhaba", "ku")


@pytest.mark.asyncio
async def test_clearing_input_discards_in_flight_response(manual_translate):
    orchestrator = TranslationOrchestrator(manual_translate)

    task = await _start(orchestrator, "a", "ku", "en", "tr")
    await orchestrator.reconcile("", "ku", "en", "tr")
    manual_translate.resolve(0, make_result("a"))
    await task

    assert orchestrator.result is None
    assert orchestrator.is_loading is False


@pytest.mark.asyncio
async def test_listeners_see_each_transition(fake_translate):
    orchestrator = TranslationOrchestrator(fake_translate)
    seen = []
    orchestrator.add_listener(lambda o: seen.append((o.is_loading, o.result is not None)))

    await orchestrator.reconcile("rojbaş", "ku", "en", "tr")

    assert seen == [(True, False), (False, True)]


@pytest.mark.asyncio
async def test_promote_alternative_is_local(fake_translate):
    orchestrator = TranslationOrchestrator(fake_translate)
    await orchestrator.reconcile("rojbaş", "ku", "en", "tr")
    generation = orchestrator.generation

    assert orchestrator.promote_alternative("rojbaş:en:alt") is True

    assert orchestrator.result.main_translation == "rojbaş:en:alt"
    assert orchestrator.result.alternative_translations == ("rojbaş:en",)
    assert orchestrator.generation == generation
    assert orchestrator.result_generation == generation
    assert len(fake_translate.calls) == 1


def test_promote_without_result_returns_false(fake_translate):
    assert TranslationOrchestrator(fake_translate).promote_alternative("x") is False


@pytest.mark.asyncio
async def test_close_discards_in_flight_response(manual_translate):
    orchestrator = TranslationOrchestrator(manual_translate)

    task = await _start(orchestrator, "a", "ku", "en", "tr")
    orchestrator.close()
    manual_translate.resolve(0, make_result("a"))
    await task

    assert orchestrator.result is None
    assert orchestrator.is_loading is False


@pytest.mark.asyncio
async def test_clear_and_close_each_start_a_new_epoch(fake_translate):
    orchestrator = TranslationOrchestrator(fake_translate)
    await orchestrator.reconcile("rojbaş", "ku", "en", "tr")
    assert orchestrator.result_generation == orchestrator.generation == 1

    await orchestrator.reconcile("", "ku", "en", "tr")
    assert orchestrator.generation == 2
    assert orchestrator.result_generation is None

    orchestrator.close()
    assert orchestrator.generation == 3
