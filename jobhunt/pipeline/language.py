"""Description language detection.

The pipeline only ever uses the single best guess. Detectors may answer with
ISO 639-1 codes ("en") or English names ("english"); normalize_language()
folds both forms onto the code so configuration can use either.
"""

import logging
from typing import Protocol, runtime_checkable

from langdetect import DetectorFactory, detect_langs
from langdetect.lang_detect_exception import LangDetectException

logger = logging.getLogger(__name__)

LANGUAGE_NAMES: dict[str, str] = {
    "arabic": "ar",
    "bulgarian": "bg",
    "chinese": "zh",
    "croatian": "hr",
    "czech": "cs",
    "danish": "da",
    "dutch": "nl",
    "english": "en",
    "estonian": "et",
    "finnish": "fi",
    "french": "fr",
    "german": "de",
    "greek": "el",
    "hebrew": "he",
    "hindi": "hi",
    "hungarian": "hu",
    "indonesian": "id",
    "italian": "it",
    "japanese": "ja",
    "korean": "ko",
    "latvian": "lv",
    "lithuanian": "lt",
    "norwegian": "no",
    "persian": "fa",
    "polish": "pl",
    "portuguese": "pt",
    "romanian": "ro",
    "russian": "ru",
    "slovak": "sk",
    "slovene": "sl",
    "spanish": "es",
    "swedish": "sv",
    "turkish": "tr",
    "ukrainian": "uk",
    "vietnamese": "vi",
}


@runtime_checkable
class LanguageDetector(Protocol):
    """Ranked (language, confidence) guesses for a text, best first."""

    def detect(self, text: str, count: int = 1) -> list[tuple[str, float]]: ...


class LangdetectDetector:
    """LanguageDetector backed by the langdetect package.

    langdetect is non-deterministic unless seeded; the seed is fixed at
    construction so the same description always gets the same guess.
    """

    def __init__(self, seed: int = 0) -> None:
        DetectorFactory.seed = seed

    def detect(self, text: str, count: int = 1) -> list[tuple[str, float]]:
        try:
            guesses = detect_langs(text)
        except LangDetectException:
            logger.debug("No language features in text (%d chars)", len(text))
            return []
        return [(g.lang, g.prob) for g in guesses[:count]]


def normalize_language(value: str) -> str:
    """Map a language name or code to its lower-case ISO 639-1 code.

    Regional variants ("zh-cn", "pt_BR") collapse to the base code. Unknown
    values are returned lower-cased and stripped.
    """
    key = value.strip().lower()
    if key in LANGUAGE_NAMES:
        return LANGUAGE_NAMES[key]
    for sep in ("-", "_"):
        if sep in key:
            key = key.split(sep, 1)[0]
    return key


def top_language(detector: LanguageDetector, text: str) -> str | None:
    """Return the highest-confidence language for ``text``, or None."""
    if not text.strip():
        return None
    guesses = detector.detect(text, 1)
    if not guesses:
        return None
    return guesses[0][0]
