"""
KuTrans - 库尔德语 / 土耳其语 / 英语 AI 翻译客户端

提供异步翻译服务客户端、输入防抖、翻译请求编排和界面会话状态。
"""

__version__ = "0.3.0"

from .core import KurdishTranslator
from .sync import KurdishTranslatorSync, create
from .models import TranslationRequest, TranslationResult
from .debounce import Debouncer
from .orchestrator import TranslationOrchestrator
from .session import TranslatorSession
from .i18n import UIStrings
from .exceptions import (
    KuTransError, ConfigurationError, ServiceError, ValidationError
)

__all__ = [
    'KurdishTranslator',
    'KurdishTranslatorSync',
    'create',
    'TranslationRequest',
    'TranslationResult',
    'Debouncer',
    'TranslationOrchestrator',
    'TranslatorSession',
    'UIStrings',
    'KuTransError',
    'ConfigurationError',
    'ServiceError',
    'ValidationError'
]
