"""Display strings for the supported languages.

Only free-text messages are translated; rate-limit labels and time units
stay in their compact ASCII form in every language.
"""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Translations:
    no_context: str


LOCALES: dict[str, Translations] = {
    "en": Translations(no_context="No context yet"),
    "ko": Translations(no_context="컨텍스트 없음"),
}


def detect_system_language() -> str:
    """Pick 'ko' when the first set locale variable is Korean, else 'en'."""
    lang = os.environ.get("LANG") or os.environ.get("LC_ALL") or os.environ.get("LC_MESSAGES") or ""
    if lang.lower().startswith("ko"):
        return "ko"
    return "en"


def get_translations(language: str = "auto") -> Translations:
    """Translations for ``language``; unknown languages get English."""
    if language == "auto":
        language = detect_system_language()
    return LOCALES.get(language, LOCALES["en"])
