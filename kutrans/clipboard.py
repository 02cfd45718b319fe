"""复制到剪贴板，并在短时间内显示“已复制”状态。"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from .constants import COPY_FEEDBACK_SECONDS

logger = logging.getLogger(__name__)


class ClipboardFeedback:
    """同一时间只有一个复制标识处于“已复制”状态。"""

    def __init__(
        self,
        writer: Optional[Callable[[str], None]] = None,
        feedback_seconds: float = COPY_FEEDBACK_SECONDS,
    ) -> None:
        self._writer = writer
        self.feedback_seconds = feedback_seconds
        self._copied_id: Optional[str] = None
        self._handle: Optional[asyncio.TimerHandle] = None

    def copy(self, text: Optional[str], copy_id: str) -> bool:
        if not text:
            return False
        if self._writer is None:
            logger.warning("未配置剪贴板写入函数，跳过复制")
            return False
        self._writer(text)
        self._cancel_handle()
        self._copied_id = copy_id
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.feedback_seconds, self._revert)
        return True

    def is_copied(self, copy_id: str) -> bool:
        return self._copied_id == copy_id

    def close(self) -> None:
        self._cancel_handle()
        self._copied_id = None

    def _revert(self) -> None:
        self._handle = None
        self._copied_id = None

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
