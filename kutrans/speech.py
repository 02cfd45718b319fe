"""语音朗读的语言选择。库尔德语没有可用的语音。"""

from __future__ import annotations

import logging
from typing import Optional

from langdetect import DetectorFactory, LangDetectException, detect_langs

from .constants import AUTO, SPEECH_LOCALES

logger = logging.getLogger(__name__)

DetectorFactory.seed = 0

_NAME_PREFIXES = {
    "kurdish": "ku",
    "turkish": "tr",
    "english": "en",
}


def language_from_name(name: Optional[str]) -> Optional[str]:
    """把模型返回的语言名称（如 'Kurdish (Kurmanji)'）映射为语言代码。"""
    if not name:
        return None
    lowered = name.strip().lower()
    for prefix, code in _NAME_PREFIXES.items():
        if lowered.startswith(prefix):
            return code
    return None


def detect_language(text: str) -> Optional[str]:
    """用 langdetect 识别土耳其语或英语，其他情况返回 None。"""
    if not text or not text.strip():
        return None
    try:
        langs = detect_langs(text)
    except LangDetectException as exc:
        logger.debug("语言检测失败: %s", exc)
        return None
    if not langs:
        return None
    lang = langs[0].lang
    return lang if lang in SPEECH_LOCALES else None


def source_speech_language(
    source_language: str,
    detected_language: Optional[str],
    text: str,
) -> Optional[str]:
    if source_language != AUTO:
        return source_language
    return language_from_name(detected_language) or detect_language(text)


def is_kurdish_source(source_language: str, detected_language: Optional[str]) -> bool:
    if source_language == "ku":
        return True
    return source_language == AUTO and language_from_name(detected_language) == "ku"


def speech_locale(language: Optional[str]) -> Optional[str]:
    return SPEECH_LOCALES.get(language) if language else None
