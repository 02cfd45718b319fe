"""测试共用的翻译函数替身"""

import asyncio

import pytest

from kutrans.models import TranslationResult


def make_result(text, target="en", **overrides):
    fields = dict(
        detected_language="",
        corrected_source_text=text,
        main_translation=f"{text}:{target}",
        alternative_translations=(f"{text}:{target}:alt",),
        meaning_explanation="context",
    )
    fields.update(overrides)
    return TranslationResult(**fields)


class FakeTranslate:
    """记录每次调用；auto=False 时由测试手动完成每个请求。"""

    def __init__(self, auto=True, responder=None):
        self.auto = auto
        self.responder = responder or (lambda text, src, tgt, ui: make_result(text, tgt))
        self.calls = []
        self.futures = []

    async def __call__(self, text, source_language, target_language, ui_language):
        self.calls.append((text, source_language, target_language, ui_language))
        if self.auto:
            outcome = self.responder(text, source_language, target_language, ui_language)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome
        future = asyncio.get_running_loop().create_future()
        self.futures.append(future)
        return await future

    def resolve(self, index, result):
        self.futures[index].set_result(result)

    def fail(self, index, exc):
        self.futures[index].set_exception(exc)


@pytest.fixture
def fake_translate():
    return FakeTranslate()


@pytest.fixture
def manual_translate():
    return FakeTranslate(auto=False)
