"""翻译请求编排。

把防抖后的输入和当前语言选择转换为至多一次外部调用，并通过代数计数
丢弃被新请求取代的响应：界面状态只反映最近一次派发的请求。

``generation`` 是状态纪元（state epoch），而不是请求计数：派发新请求、
输入清空以及 ``close()`` 都会使其递增，从而让所有在途响应失效。
清空和关闭时的递增是有意为之，迟到的响应不会重新填充已清空的界面。
"""

from __future__ import annotations

import logging
import time
from typing import Awaitable, Callable, List, Optional, Type

from .exceptions import ConfigurationError, KuTransError, ServiceError
from .i18n import UIStrings
from .models import TranslationRequest, TranslationResult
from .utils import DispatchMetrics

logger = logging.getLogger(__name__)

TranslateFunc = Callable[[str, str, str, str], Awaitable[TranslationResult]]
Listener = Callable[["TranslationOrchestrator"], None]

ERROR_MESSAGE_KEYS = {
    ConfigurationError: "apiKeyMissingError",
    ServiceError: "apiError",
}


def classify_error(exc: BaseException) -> Type[KuTransError]:
    if isinstance(exc, ConfigurationError):
        return ConfigurationError
    return ServiceError


class TranslationOrchestrator:
    """持有界面可见的翻译状态（结果、错误、加载中）。

    ``result_generation`` 记录当前结果来自哪个纪元，本地提升备选译文不会改变它。
    """

    def __init__(self, translate: TranslateFunc, strings: Optional[UIStrings] = None) -> None:
        self._translate = translate
        self.strings = strings or UIStrings()
        self.result: Optional[TranslationResult] = None
        self.is_loading = False
        self.error = ""
        self.error_kind: Optional[Type[KuTransError]] = None
        self.generation = 0
        self.result_generation: Optional[int] = None
        self.last_request: Optional[TranslationRequest] = None
        self.metrics = DispatchMetrics()
        self._listeners: List[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    async def reconcile(
        self,
        text: str,
        source_language: str,
        target_language: str,
        ui_language: str,
    ) -> bool:
        """按当前输入派发翻译请求，返回是否应用了本次响应。

        空输入同样开启新纪元并清空状态，但不派发请求。
        """
        if not text.strip():
            self.generation += 1
            self.last_request = None
            self.result = None
            self.result_generation = None
            self.error = ""
            self.error_kind = None
            self.is_loading = False
            self._notify()
            return False

        request = TranslationRequest(text, source_language, target_language, ui_language)
        if request == self.last_request:
            self.metrics.record_suppressed()
            logger.debug("重复请求，跳过派发: %r", request)
            return False

        self.last_request = request
        self.generation += 1
        generation = self.generation
        self.is_loading = True
        self.error = ""
        self.error_kind = None
        self.metrics.record_dispatch()
        self._notify()

        start = time.perf_counter()
        try:
            result = await self._translate(
                request.source_text,
                request.source_language,
                request.target_language,
                request.ui_language,
            )
        except Exception as exc:
            self.metrics.record_completion(time.perf_counter() - start, False)
            if generation != self.generation:
                self.metrics.record_stale()
                logger.debug("丢弃过期的失败响应 (generation=%d)", generation)
                return False
            kind = classify_error(exc)
            logger.error("翻译失败 (%s): %s", kind.__name__, exc)
            self.error_kind = kind
            self.error = self.strings.get(request.ui_language, ERROR_MESSAGE_KEYS[kind])
            self.result = None
            self.result_generation = None
            # 失败的请求允许原样重试
            self.last_request = None
            self.is_loading = False
            self._notify()
            return False

        self.metrics.record_completion(time.perf_counter() - start, True)
        if generation != self.generation:
            self.metrics.record_stale()
            logger.debug("丢弃过期的翻译结果 (generation=%d)", generation)
            return False
        self.result = result
        self.result_generation = generation
        self.is_loading = False
        self._notify()
        return True

    def promote_alternative(self, alternative: str) -> bool:
        """把备选译文提升为主译文，仅修改本地状态。"""
        if self.result is None:
            return False
        self.result = self.result.promote(alternative)
        self._notify()
        return True

    def close(self) -> None:
        """进入新纪元并移除监听器，在途响应到达后一律丢弃。"""
        self.generation += 1
        self.is_loading = False
        self._listeners.clear()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
