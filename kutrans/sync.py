"""同步封装。"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from .core import KurdishTranslator
from .models import TranslationResult


class KurdishTranslatorSync:
    """KurdishTranslator 的同步适配器，供脚本使用。"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        base_url: Optional[str] = None,
        performance_mode: str = "balanced",
        **kwargs: Any,
    ) -> None:
        self.translator = KurdishTranslator(
            api_key=api_key,
            model_name=model_name,
            base_url=base_url,
            performance_mode=performance_mode,
            **kwargs,
        )
        self._loop = asyncio.new_event_loop()

    def translate(
        self,
        text: str,
        source_language: str = "auto",
        target_language: str = "ku",
        ui_language: str = "tr",
    ) -> TranslationResult:
        return self._run(
            self.translator.translate(text, source_language, target_language, ui_language)
        )

    def configure(self, api_key: Optional[str] = None, base_url: Optional[str] = None) -> None:
        self._run(self.translator.configure(api_key=api_key, base_url=base_url))

    def get_config(self) -> dict:
        return self.translator.get_config()

    def get_metrics(self) -> dict:
        return self.translator.metrics.get_metrics()

    def close(self) -> None:
        if self._loop.is_closed():
            return
        try:
            self._loop.run_until_complete(self.translator.cleanup())
        finally:
            self._loop.close()

    def __enter__(self) -> "KurdishTranslatorSync":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _run(self, coro):
        if self._loop.is_closed():
            coro.close()
            raise RuntimeError("KurdishTranslatorSync 已关闭")
        return self._loop.run_until_complete(coro)

    @staticmethod
    def quick_translate(text: str, target_language: str = "ku", source_language: str = "auto") -> str:
        with KurdishTranslatorSync() as translator:
            return translator.translate(text, source_language, target_language).main_translation


def create(*args, **kwargs) -> KurdishTranslatorSync:
    return KurdishTranslatorSync(*args, **kwargs)
