"""界面文本表。

文本表是不可变映射（界面语言 -> 键 -> 文本），通过构造参数注入，
不作为全局可变状态使用。
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Callable, Mapping, Optional

logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = "en"

_EN = {
    "appTitle": "Kurdish AI Translate",
    "appSubtitle": "Designed by Özgür Güler. instagram: @ozguradmin",
    "autoDetect": "Auto-detect",
    "kurdish": "Kurdish",
    "turkish": "Turkish",
    "english": "English",
    "swapLanguages": "Swap languages",
    "sourcePlaceholder": "Enter text to translate...",
    "didYouMean": "Did you mean:",
    "alternativesTitle": "Alternative Translations",
    "meaningTitle": "Meaning",
    "apiError": "API connection failed. Please check your connection and API Key.",
    "apiKeyMissingError": "API Key is not configured. Please set it up in your deployment environment.",
    "copyTooltip": "Copy to clipboard",
    "speakTooltip": "Read text aloud",
    "infoTooltip": "Show meaning and context",
    "kurdishNotSupportedForTTS": "Text-to-speech is not supported for Kurdish.",
    "characterCount": "{count}/{max}",
}

_TR = {
    "appTitle": "Kürtçe AI Çevirmen",
    "appSubtitle": "Özgür Güler tarafından tasarlanmıştır. instagram: @ozguradmin",
    "autoDetect": "Otomatik Algıla",
    "kurdish": "Kürtçe",
    "turkish": "Türkçe",
    "english": "İngilizce",
    "swapLanguages": "Dilleri değiştir",
    "sourcePlaceholder": "Çevirmek için metin girin...",
    "didYouMean": "Bunu mu demek istediniz:",
    "alternativesTitle": "Alternatif Çeviriler",
    "meaningTitle": "Anlamı",
    "apiError": "API bağlantısı başarısız. Lütfen bağlantınızı ve API anahtarınızı kontrol edin.",
    "apiKeyMissingError": "API Anahtarı yapılandırılmamış. Lütfen dağıtım ortamınızda ayarlayın.",
    "copyTooltip": "Panoya kopyala",
    "speakTooltip": "Metni seslendir",
    "infoTooltip": "Anlam ve bağlamı göster",
    "kurdishNotSupportedForTTS": "Seslendirme Kürtçe için desteklenmemektedir.",
}

_KU = {
    "appTitle": "Wergêrê AI Kurdî",
    "appSubtitle": "Ji hêla Özgür Güler ve hatiye sêwirandin. instagram: @ozguradmin",
    "autoDetect": "Bixweber Nas bike",
    "kurdish": "Kurdî",
    "turkish": "Tirkî",
    "english": "Îngilîzî",
    "swapLanguages": "Zimanan biguherîne",
    "sourcePlaceholder": "Nivîsê ji bo wergerê binivîse...",
    "didYouMean": "Mebesta te ev bû:",
    "alternativesTitle": "Wergerên Alternatîf",
    "meaningTitle": "Wate",
    "apiError": "Têkiliya APIyê têk çû. Ji kerema xwe pêwendiya xwe û mifteya APIya xwe kontrol bikin.",
    "apiKeyMissingError": "Mifteya APIyê nehatiye veavakirin. Ji kerema xwe wê di hawîrdora xweya bicîhkirinê de saz bikin.",
    "copyTooltip": "Li clipboardê kopî bike",
    "speakTooltip": "Nivîsê bi deng bixwîne",
    "infoTooltip": "Wate û çarçoveyê nîşan bide",
    "kurdishNotSupportedForTTS": "Xwendina bi deng ji bo zimanê Kurdî nayê piştgirî kirin.",
}

DEFAULT_STRINGS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "en": MappingProxyType(_EN),
    "tr": MappingProxyType(_TR),
    "ku": MappingProxyType(_KU),
})


_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def interpolate(template: str, params: Optional[Mapping[str, object]] = None) -> str:
    """一次性替换 ``{name}`` 占位符；替换值中的花括号不再展开，未知占位符原样保留。"""
    if not params:
        return template

    def substitute(match: "re.Match[str]") -> str:
        name = match.group(1)
        return str(params[name]) if name in params else match.group(0)

    return _PLACEHOLDER.sub(substitute, template)


class UIStrings:
    """只读的界面文本查找。"""

    def __init__(
        self,
        table: Optional[Mapping[str, Mapping[str, str]]] = None,
        fallback: str = FALLBACK_LANGUAGE,
    ) -> None:
        source = DEFAULT_STRINGS if table is None else table
        self._table: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {lang: MappingProxyType(dict(entries)) for lang, entries in source.items()}
        )
        if fallback not in self._table:
            raise ValueError(f"回退语言不在文本表中: {fallback}")
        self.fallback = fallback

    def get(self, language: str, key: str, params: Optional[Mapping[str, object]] = None) -> str:
        entries = self._table.get(language, {})
        template = entries.get(key)
        if template is None:
            template = self._table[self.fallback].get(key)
            if template is None:
                raise KeyError(key)
            logger.debug("界面文本 %s 缺少 %s 语言版本，使用 %s", key, language, self.fallback)
        return interpolate(template, params)

    def bind(self, language: str) -> Callable[..., str]:
        """返回绑定到某个界面语言的 ``t(key, params=None)``。"""

        def t(key: str, params: Optional[Mapping[str, object]] = None) -> str:
            return self.get(language, key, params)

        return t
