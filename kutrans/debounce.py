"""输入防抖。"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Generic, Optional, TypeVar

from .constants import DEBOUNCE_DELAY

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """输入停止变化 ``delay`` 秒后才更新 ``value``。

    每次 ``push`` 都会取消尚未触发的定时器并重新计时，
    ``close`` 之后不会再有任何更新。
    """

    def __init__(
        self,
        delay: float = DEBOUNCE_DELAY,
        on_settle: Optional[Callable[[T], None]] = None,
        initial: T = "",  # type: ignore[assignment]
    ) -> None:
        if delay < 0:
            raise ValueError("delay 不能为负数")
        self.delay = delay
        self._on_settle = on_settle
        self._value: T = initial
        self._pending_value: Optional[T] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._closed = False

    @property
    def value(self) -> T:
        return self._value

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, value: T) -> None:
        if self._closed:
            raise RuntimeError("Debouncer 已关闭")
        self._cancel_handle()
        self._pending_value = value
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def flush(self) -> bool:
        """立即提交等待中的值，返回 ``value`` 是否因此改变。"""
        if self._handle is None:
            return False
        self._cancel_handle()
        return self._settle(self._pending_value)  # type: ignore[arg-type]

    def cancel(self) -> None:
        self._cancel_handle()
        self._pending_value = None

    def close(self) -> None:
        self.cancel()
        self._closed = True

    def _fire(self) -> None:
        self._handle = None
        self._settle(self._pending_value)  # type: ignore[arg-type]

    def _settle(self, value: T) -> bool:
        self._pending_value = None
        if value == self._value:
            return False
        self._value = value
        logger.debug("输入已稳定: %r", value)
        if self._on_settle is not None:
            self._on_settle(value)
        return True

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
