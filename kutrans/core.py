"""核心翻译模块。"""

from __future__ import annotations

import json
import logging
import os
import re
import time
from typing import Any, Dict, Optional

import openai
from dotenv import load_dotenv
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_EXPLANATION_LANGUAGE,
    DEFAULT_MODEL,
    DEFAULT_PERFORMANCE_CONFIG,
    LANGUAGE_NAMES,
    PERFORMANCE_PROFILES,
    PROMPT_TEMPLATE,
    RESPONSE_SCHEMA,
)
from .exceptions import ConfigurationError, ServiceError, ValidationError
from .models import TranslationRequest, TranslationResult
from .resources import ClientManager
from .utils import RequestMetrics

logger = logging.getLogger(__name__)

load_dotenv()

# 可重试的瞬时错误
TRANSIENT_ERRORS = (openai.APIConnectionError, openai.RateLimitError)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def build_prompt(request: TranslationRequest) -> str:
    """把语言名称和原文嵌入提示词模板。"""
    return PROMPT_TEMPLATE.format(
        source_language=LANGUAGE_NAMES[request.source_language],
        target_language=LANGUAGE_NAMES[request.target_language],
        ui_language=LANGUAGE_NAMES.get(request.ui_language, DEFAULT_EXPLANATION_LANGUAGE),
        text=request.source_text,
    )


def parse_response(content: Optional[str]) -> TranslationResult:
    """解析模型返回的 JSON 文本，无法解析时抛出 ServiceError。"""
    if content is None:
        raise ServiceError("模型未返回内容")
    text = content.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ServiceError(f"无法解析模型响应: {exc}") from exc
    if not isinstance(payload, dict):
        raise ServiceError("模型响应不是 JSON 对象")
    try:
        return TranslationResult.from_payload(payload)
    except ValidationError as exc:
        raise ServiceError(f"模型响应结构不符: {exc}") from exc


class KurdishTranslator:
    """库尔德语、土耳其语、英语之间的 AI 翻译服务客户端。"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        base_url: Optional[str] = None,
        performance_mode: str = "balanced",
        **kwargs: Any,
    ) -> None:
        self.api_key = (
            api_key
            or os.getenv("KUTRANS_API_KEY")
            or os.getenv("API_KEY")
            or os.getenv("OPENAI_API_KEY")
        )
        self.base_url = base_url or os.getenv("KUTRANS_BASE_URL", DEFAULT_BASE_URL)
        self.model = model_name or os.getenv("KUTRANS_MODEL", DEFAULT_MODEL)

        if performance_mode not in PERFORMANCE_PROFILES:
            raise ConfigurationError(f"无效的性能模式: {performance_mode}")

        self.perf_config: Dict[str, Any] = DEFAULT_PERFORMANCE_CONFIG.copy()
        self.perf_config.update(PERFORMANCE_PROFILES[performance_mode])
        self.perf_config.update(kwargs)

        self.client_manager = ClientManager(
            self.api_key, self.base_url, timeout=self.perf_config["timeout"]
        )
        self.metrics = RequestMetrics()

    async def configure(self, api_key: Optional[str] = None, base_url: Optional[str] = None) -> None:
        """更新凭据或接口地址，下一次调用时生效。"""
        if api_key is not None:
            self.api_key = api_key
        if base_url is not None:
            self.base_url = base_url
        await self.client_manager.reset(api_key=api_key, base_url=base_url)

    async def translate(
        self,
        text: str,
        source_language: str = "auto",
        target_language: str = "ku",
        ui_language: str = "tr",
    ) -> TranslationResult:
        request = TranslationRequest(text, source_language, target_language, ui_language)
        if request.is_empty:
            return TranslationResult.empty()

        if not self.api_key:
            raise ConfigurationError("API_KEY_MISSING")

        start = time.time()
        try:
            content = await self._complete(build_prompt(request))
            result = parse_response(content)
        except ServiceError:
            self.metrics.record_request(time.time() - start, False)
            raise
        except Exception as exc:
            self.metrics.record_request(time.time() - start, False)
            logger.error("翻译服务调用失败: %s", exc)
            raise ServiceError(f"翻译失败: {exc}") from exc

        self.metrics.record_request(time.time() - start, True)
        return result

    async def _complete(self, prompt: str) -> Optional[str]:
        client = await self.client_manager.get_client()
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max(1, int(self.perf_config["max_retries"]))),
            wait=wait_exponential(
                multiplier=self.perf_config.get("retry_multiplier", 0.5),
                min=self.perf_config.get("retry_min_wait", 1),
                max=self.perf_config.get("retry_max_wait", 4),
            ),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                completion = await client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=self.perf_config["temperature"],
                    max_tokens=self.perf_config["max_tokens"],
                    response_format={
                        "type": "json_schema",
                        "json_schema": {
                            "name": "translation_result",
                            "schema": RESPONSE_SCHEMA,
                        },
                    },
                )
        return completion.choices[0].message.content

    def get_config(self) -> Dict[str, object]:
        masked = f"{self.api_key[:4]}..." if self.api_key else None
        return {
            "api_key": masked,
            "base_url": self.base_url,
            "model": self.model,
            "performance_config": self.perf_config,
        }

    async def cleanup(self) -> None:
        await self.client_manager.cleanup()

    async def __aenter__(self) -> "KurdishTranslator":
        if self.api_key:
            await self.client_manager.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()
