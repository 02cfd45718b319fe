"""常量和配置定义"""

# API 相关常量
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"
DEFAULT_MODEL = "gemini-2.5-flash"

# 界面节奏（秒）
DEBOUNCE_DELAY = 0.75
COPY_FEEDBACK_SECONDS = 2.0
MAX_SOURCE_LENGTH = 5000
MAX_ALTERNATIVES = 3

# 性能配置；gemini-2.5 的 max_tokens 同时计入思考 token
DEFAULT_PERFORMANCE_CONFIG = {
    'max_retries': 3,
    'timeout': 30,
    'temperature': 0.2,
    'max_tokens': 4096,
}

PERFORMANCE_PROFILES = {
    'fast': {
        'max_retries': 2,
        'timeout': 15,
        'temperature': 0.3,
        'max_tokens': 2048,
    },
    'balanced': DEFAULT_PERFORMANCE_CONFIG,
    'accurate': {
        'max_retries': 5,
        'timeout': 60,
        'temperature': 0.1,
        'max_tokens': 8192,
    }
}

# 语言相关映射
AUTO = 'auto'
SOURCE_LANGUAGES = ('auto', 'ku', 'tr', 'en')
TARGET_LANGUAGES = ('ku', 'tr', 'en')
UI_LANGUAGES = ('en', 'tr', 'ku')

LANGUAGE_NAMES = {
    'auto': 'Auto Detect',
    'ku': 'Kurdish',
    'tr': 'Turkish',
    'en': 'English',
}

# 界面语言缺失时，释义使用土耳其语
DEFAULT_EXPLANATION_LANGUAGE = 'Turkish'

# 语音合成可用的区域设置，库尔德语不支持
SPEECH_LOCALES = {
    'en': 'en-US',
    'tr': 'tr-TR',
}

PROMPT_TEMPLATE = """
    You are a world-class multilingual translator specializing in Kurdish (Kurmanji and Sorani dialects), Turkish, and English. Your translations must be precise, culturally aware, and contextually accurate.

    Translate the following text.
    Source Language: "{source_language}"
    Target Language: "{target_language}"
    Text to Translate: "{text}"

    Follow these steps precisely:
    1. If Source Language is 'Auto Detect', first identify whether the text is Kurdish, Turkish, or English and report it in 'detectedLanguage'.
    2. Analyze the text carefully. It may contain colloquialisms, slang, or spelling errors (e.g. 'te ez helendım' should be understood as 'te ez hilandim').
    3. Provide a corrected version of the source text in its original language in 'correctedSourceText'.
    4. Provide the most accurate, natural-sounding translation in 'mainTranslation'. For idioms and terms of endearment (like 'çavreşamın', literally 'my black eyes' but used as 'my darling'), give the common usage; the literal translation belongs among the alternatives.
    5. Provide up to 3 alternative translations in 'alternativeTranslations' that capture different nuances.
    6. Provide a concise 'meaningExplanation' of 1-2 sentences, written in {ui_language}, clarifying the cultural context, nuance, or idiomatic meaning. This is mandatory.
    7. Respond ONLY with a valid JSON object that follows the provided schema, without any text or markdown outside the JSON structure.
"""

RESPONSE_SCHEMA = {
    'type': 'object',
    'properties': {
        'detectedLanguage': {
            'type': 'string',
            'description': "The detected source language (e.g. 'Kurdish', 'Turkish', 'English'). Only present if the source language is 'Auto Detect'.",
        },
        'correctedSourceText': {
            'type': 'string',
            'description': 'The source text after correcting spelling or grammatical errors.',
        },
        'mainTranslation': {
            'type': 'string',
            'description': 'The most accurate primary translation; for idioms, the commonly understood meaning.',
        },
        'alternativeTranslations': {
            'type': 'array',
            'items': {'type': 'string'},
            'maxItems': MAX_ALTERNATIVES,
            'description': 'Up to 3 alternative translations. For idiomatic text one alternative is the literal translation.',
        },
        'meaningExplanation': {
            'type': 'string',
            'description': "A 1-2 sentence explanation of the translation's cultural context, nuance, or idiomatic meaning.",
        },
    },
    'required': [
        'mainTranslation',
        'alternativeTranslations',
        'correctedSourceText',
        'meaningExplanation',
    ],
}
