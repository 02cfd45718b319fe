"""资源管理模块"""

import logging
from typing import Optional

import openai

logger = logging.getLogger(__name__)


class ClientManager:
    """管理 OpenAI 兼容接口的异步客户端"""

    def __init__(self, api_key: Optional[str], base_url: str, timeout: float = 30):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._client: Optional[openai.AsyncOpenAI] = None

    @property
    def is_initialized(self) -> bool:
        return self._client is not None

    async def initialize(self):
        """初始化客户端"""
        if not self._client:
            # 重试由调用方的 tenacity 策略负责
            self._client = openai.AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
            logger.info("Translation client initialized for %s", self.base_url)

    async def get_client(self) -> openai.AsyncOpenAI:
        """获取客户端实例"""
        if not self._client:
            await self.initialize()
        return self._client

    async def reset(self, api_key: Optional[str] = None, base_url: Optional[str] = None):
        """更换凭据后重建客户端"""
        await self.cleanup()
        if api_key is not None:
            self.api_key = api_key
        if base_url is not None:
            self.base_url = base_url

    async def cleanup(self):
        """清理客户端资源"""
        if self._client:
            await self._client.close()
            self._client = None
            logger.info("Translation client closed")

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.cleanup()
