"""数据模型定义。"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple

from .constants import MAX_ALTERNATIVES, SOURCE_LANGUAGES, TARGET_LANGUAGES, UI_LANGUAGES
from .exceptions import ValidationError


def check_language(code: str, allowed: Tuple[str, ...], role: str) -> None:
    if code not in allowed:
        raise ValidationError(f"不支持的{role}语言: {code!r}")


@dataclass(frozen=True)
class TranslationRequest:
    """一次翻译请求。四个字段全部相同即视为重复请求。"""

    source_text: str
    source_language: str
    target_language: str
    ui_language: str

    def __post_init__(self) -> None:
        check_language(self.source_language, SOURCE_LANGUAGES, "源")
        check_language(self.target_language, TARGET_LANGUAGES, "目标")
        check_language(self.ui_language, UI_LANGUAGES, "界面")

    @property
    def is_empty(self) -> bool:
        return not self.source_text.strip()


@dataclass(frozen=True)
class TranslationResult:
    """模型返回的结构化翻译结果。"""

    detected_language: str = ""
    corrected_source_text: str = ""
    main_translation: str = ""
    alternative_translations: Tuple[str, ...] = field(default_factory=tuple)
    meaning_explanation: str = ""

    @classmethod
    def empty(cls) -> "TranslationResult":
        return cls()

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TranslationResult":
        """从解析后的 JSON 构建结果。

        缺失或为 null 的字段使用空值；类型不符时抛出 ValidationError。

        Args:
            payload: 模型返回的 JSON 对象
        """

        def text(key: str) -> str:
            value = payload.get(key)
            if value is None:
                return ""
            if not isinstance(value, str):
                raise ValidationError(f"字段 {key} 应为字符串，实际为 {type(value).__name__}")
            return value

        raw_alternatives = payload.get("alternativeTranslations")
        if raw_alternatives is None:
            raw_alternatives = []
        if not isinstance(raw_alternatives, list):
            raise ValidationError(
                f"字段 alternativeTranslations 应为数组，实际为 {type(raw_alternatives).__name__}"
            )
        for item in raw_alternatives:
            if not isinstance(item, str):
                raise ValidationError("alternativeTranslations 只能包含字符串")
        alternatives = tuple(item for item in raw_alternatives if item.strip())[:MAX_ALTERNATIVES]

        return cls(
            detected_language=text("detectedLanguage"),
            corrected_source_text=text("correctedSourceText"),
            main_translation=text("mainTranslation"),
            alternative_translations=alternatives,
            meaning_explanation=text("meaningExplanation"),
        )

    def promote(self, alternative: str) -> "TranslationResult":
        """将备选译文设为主译文，原主译文移入备选列表。"""
        if alternative not in self.alternative_translations:
            raise ValidationError(f"不是备选译文: {alternative!r}")

        alternatives = [item for item in self.alternative_translations if item != alternative]
        if self.main_translation and self.main_translation not in alternatives:
            alternatives.append(self.main_translation)
        return replace(
            self,
            main_translation=alternative,
            alternative_translations=tuple(alternatives),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detectedLanguage": self.detected_language,
            "correctedSourceText": self.corrected_source_text,
            "mainTranslation": self.main_translation,
            "alternativeTranslations": list(self.alternative_translations),
            "meaningExplanation": self.meaning_explanation,
        }


__all__ = [
    "TranslationRequest",
    "TranslationResult",
]
