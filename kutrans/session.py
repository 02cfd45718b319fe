"""翻译界面的会话状态。

会话持有原文、语言选择和防抖器，把稳定后的输入交给
:class:`~kutrans.orchestrator.TranslationOrchestrator`，并处理交换语言、
采纳纠错、提升备选译文、复制和朗读等用户操作。
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Set

from .clipboard import ClipboardFeedback
from .constants import (
    AUTO,
    COPY_FEEDBACK_SECONDS,
    DEBOUNCE_DELAY,
    MAX_SOURCE_LENGTH,
    SOURCE_LANGUAGES,
    TARGET_LANGUAGES,
    UI_LANGUAGES,
)
from .debounce import Debouncer
from .i18n import UIStrings
from .models import TranslationResult, check_language
from .orchestrator import TranslateFunc, TranslationOrchestrator
from .speech import is_kurdish_source, source_speech_language, speech_locale

logger = logging.getLogger(__name__)

Speaker = Callable[[str, Optional[str]], None]


class TranslatorSession:
    """一个翻译界面实例的全部状态。必须在事件循环中使用。"""

    def __init__(
        self,
        translate: TranslateFunc,
        strings: Optional[UIStrings] = None,
        *,
        ui_language: str = "tr",
        source_language: str = AUTO,
        target_language: str = "ku",
        delay: float = DEBOUNCE_DELAY,
        clipboard_writer: Optional[Callable[[str], None]] = None,
        speaker: Optional[Speaker] = None,
        copy_feedback_seconds: float = COPY_FEEDBACK_SECONDS,
    ) -> None:
        check_language(ui_language, UI_LANGUAGES, "界面")
        check_language(source_language, SOURCE_LANGUAGES, "源")
        check_language(target_language, TARGET_LANGUAGES, "目标")

        self.strings = strings or UIStrings()
        self.orchestrator = TranslationOrchestrator(translate, self.strings)
        self.debouncer: Debouncer[str] = Debouncer(delay, on_settle=self._on_settle)
        self.clipboard = ClipboardFeedback(clipboard_writer, copy_feedback_seconds)
        self._speaker = speaker
        self.meaning_visible = False
        self._seen_result_generation: Optional[int] = None
        self.orchestrator.add_listener(self._on_state_change)

        self.source_text = ""
        self.ui_language = ui_language
        self.source_language = source_language
        self.target_language = target_language
        self.t = self.strings.bind(ui_language)
        self._enforce_distinct_languages()

        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    # 状态
    @property
    def result(self) -> Optional[TranslationResult]:
        return self.orchestrator.result

    @property
    def is_loading(self) -> bool:
        return self.orchestrator.is_loading

    @property
    def error(self) -> str:
        return self.orchestrator.error

    @property
    def can_swap(self) -> bool:
        return self.source_language != AUTO

    @property
    def correction_suggestion(self) -> Optional[str]:
        result = self.orchestrator.result
        if result is None or not result.corrected_source_text:
            return None
        if result.corrected_source_text == self.source_text:
            return None
        return result.corrected_source_text

    @property
    def is_source_kurdish(self) -> bool:
        result = self.orchestrator.result
        detected = result.detected_language if result else None
        return is_kurdish_source(self.source_language, detected)

    @property
    def is_target_kurdish(self) -> bool:
        return self.target_language == "ku"

    @property
    def character_count(self) -> str:
        return self.t("characterCount", {"count": len(self.source_text), "max": MAX_SOURCE_LENGTH})

    # 输入与语言选择
    def set_source_text(self, text: str) -> None:
        self.source_text = text[:MAX_SOURCE_LENGTH]
        self.debouncer.push(self.source_text)

    def set_source_language(self, code: str) -> None:
        check_language(code, SOURCE_LANGUAGES, "源")
        if code == self.source_language:
            return
        self.source_language = code
        self._enforce_distinct_languages()
        self._schedule_reconcile()

    def set_target_language(self, code: str) -> None:
        check_language(code, TARGET_LANGUAGES, "目标")
        if code == self.target_language:
            return
        self.target_language = code
        self._enforce_distinct_languages()
        self._schedule_reconcile()

    def set_ui_language(self, code: str) -> None:
        check_language(code, UI_LANGUAGES, "界面")
        if code == self.ui_language:
            return
        self.ui_language = code
        self.t = self.strings.bind(code)
        self._schedule_reconcile()

    # 用户操作
    def swap_languages(self) -> bool:
        if not self.can_swap:
            return False
        self.source_language, self.target_language = self.target_language, self.source_language
        self._enforce_distinct_languages()

        result = self.orchestrator.result
        if result is not None and result.main_translation:
            self.set_source_text(result.main_translation)
            if self.debouncer.flush():
                return True
        self._schedule_reconcile()
        return True

    def accept_correction(self) -> bool:
        result = self.orchestrator.result
        if result is None or not result.corrected_source_text:
            return False
        self.set_source_text(result.corrected_source_text)
        return True

    def promote_alternative(self, alternative: str) -> bool:
        return self.orchestrator.promote_alternative(alternative)

    def toggle_meaning(self) -> bool:
        """切换含义说明的显示状态，没有说明时保持隐藏。"""
        result = self.orchestrator.result
        if result is None or not result.meaning_explanation:
            self.meaning_visible = False
        else:
            self.meaning_visible = not self.meaning_visible
        return self.meaning_visible

    def retry(self) -> None:
        self._schedule_reconcile()

    def copy(self, text: Optional[str], copy_id: str) -> bool:
        return self.clipboard.copy(text, copy_id)

    def copy_source(self) -> bool:
        return self.copy(self.source_text, "source")

    def copy_translation(self) -> bool:
        result = self.orchestrator.result
        return self.copy(result.main_translation if result else None, "target")

    def is_copied(self, copy_id: str) -> bool:
        return self.clipboard.is_copied(copy_id)

    def speak_source(self) -> bool:
        if self.is_source_kurdish or not self.source_text.strip():
            return False
        result = self.orchestrator.result
        language = source_speech_language(
            self.source_language,
            result.detected_language if result else None,
            self.source_text,
        )
        if language == "ku":
            return False
        return self._speak(self.source_text, speech_locale(language))

    def speak_translation(self) -> bool:
        result = self.orchestrator.result
        if self.is_target_kurdish or result is None or not result.main_translation.strip():
            return False
        return self._speak(result.main_translation, speech_locale(self.target_language))

    # 生命周期
    async def wait_idle(self) -> None:
        """等待所有已调度的翻译任务完成。"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.debouncer.close()
        self.clipboard.close()
        self.orchestrator.close()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("翻译会话已关闭")

    async def __aenter__(self) -> "TranslatorSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _enforce_distinct_languages(self) -> None:
        if self.source_language != AUTO and self.source_language == self.target_language:
            self.target_language = "en" if self.source_language == "ku" else "ku"
            logger.debug("源语言与目标语言相同，目标语言改为 %s", self.target_language)

    def _on_state_change(self, orchestrator: TranslationOrchestrator) -> None:
        # 新结果到达或结果被清空时隐藏含义说明
        if orchestrator.result_generation != self._seen_result_generation:
            self._seen_result_generation = orchestrator.result_generation
            self.meaning_visible = False

    def _on_settle(self, _value: str) -> None:
        self._schedule_reconcile()

    def _schedule_reconcile(self) -> None:
        if self._closed:
            return
        task = asyncio.get_running_loop().create_task(
            self.orchestrator.reconcile(
                self.debouncer.value,
                self.source_language,
                self.target_language,
                self.ui_language,
            )
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _speak(self, text: str, locale: Optional[str]) -> bool:
        if self._speaker is None:
            logger.warning("未配置语音朗读函数")
            return False
        self._speaker(text, locale)
        return True
