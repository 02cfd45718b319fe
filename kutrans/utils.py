"""工具类与辅助功能。"""

from __future__ import annotations

import time
from typing import Any, Dict


class RequestMetrics:
    """记录翻译服务调用的耗时与成功率。"""

    def __init__(self) -> None:
        self.reset()

    def record_request(self, duration: float, success: bool) -> None:
        self.total_requests += 1
        if success:
            self.successful_requests += 1
            self.total_duration += duration
            self.max_duration = max(self.max_duration, duration)

    def get_metrics(self) -> Dict[str, Any]:
        average = self.total_duration / self.successful_requests if self.successful_requests else 0.0
        return {
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "success_rate": (
                self.successful_requests / self.total_requests if self.total_requests else 0.0
            ),
            "average_duration": average,
            "max_duration": self.max_duration,
            "uptime_seconds": time.time() - self.start_time,
        }

    def reset(self) -> None:
        self.total_requests = 0
        self.successful_requests = 0
        self.total_duration = 0.0
        self.max_duration = 0.0
        self.start_time = time.time()


class DispatchMetrics:
    """编排器的派发统计：派发、去重、过期丢弃与结果。"""

    def __init__(self) -> None:
        self.dispatched = 0
        self.suppressed = 0
        self.stale = 0
        self.succeeded = 0
        self.failed = 0
        self.total_duration = 0.0

    def record_dispatch(self) -> None:
        self.dispatched += 1

    def record_suppressed(self) -> None:
        self.suppressed += 1

    def record_stale(self) -> None:
        self.stale += 1

    def record_completion(self, duration: float, success: bool) -> None:
        self.total_duration += duration
        if success:
            self.succeeded += 1
        else:
            self.failed += 1

    def get_metrics(self) -> Dict[str, Any]:
        completed = self.succeeded + self.failed
        return {
            "dispatched": self.dispatched,
            "suppressed": self.suppressed,
            "stale": self.stale,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "average_duration": self.total_duration / completed if completed else 0.0,
        }
