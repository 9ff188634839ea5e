"""Tests for language detection helpers."""

from jobhunt.pipeline.language import (
    LangdetectDetector,
    LanguageDetector,
    normalize_language,
    top_language,
)


class _FixedDetector:
    """Returns canned guesses and records calls."""

    def __init__(self, guesses: list[tuple[str, float]]) -> None:
        self.guesses = guesses
        self.calls: list[tuple[str, int]] = []

    def detect(self, text: str, count: int = 1) -> list[tuple[str, float]]:
        self.calls.append((text, count))
        return self.guesses[:count]


class TestNormalizeLanguage:
    def test_name_to_code(self) -> None:
        assert normalize_language("english") == "en"
        assert normalize_language("German") == "de"

    def test_code_unchanged(self) -> None:
        assert normalize_language("en") == "en"

    def test_regional_variant(self) -> None:
        assert normalize_language("zh-cn") == "zh"
        assert normalize_language("pt_BR") == "pt"

    def test_whitespace_and_case(self) -> None:
        assert normalize_language("  FR ") == "fr"

    def test_unknown_passthrough(self) -> None:
        assert normalize_language("klingon") == "klingon"


class TestTopLanguage:
    def test_takes_first_guess(self) -> None:
        d = _FixedDetector([("english", 0.9), ("german", 0.1)])
        assert top_language(d, "Some text") == "english"
        assert d.calls == [("Some text", 1)]

    def test_empty_text_skips_detection(self) -> None:
        d = _FixedDetector([("en", 1.0)])
        assert top_language(d, "   ") is None
        assert d.calls == []

    def test_no_guesses(self) -> None:
        assert top_language(_FixedDetector([]), "???") is None

    def test_protocol(self) -> None:
        assert isinstance(_FixedDetector([]), LanguageDetector)


class TestLangdetectDetector:
    def test_detects_english(self) -> None:
        d = LangdetectDetector()
        text = (
            "We are looking for a senior backend engineer to design, build and "
            "maintain scalable services. You will work closely with the product team."
        )
        guesses = d.detect(text, 1)
        assert len(guesses) == 1
        assert guesses[0][0] == "en"
        assert 0.0 < guesses[0][1] <= 1.0

    def test_detects_german(self) -> None:
        d = LangdetectDetector()
        text = (
            "Wir suchen einen erfahrenen Softwareentwickler, der unsere Plattform "
            "weiterentwickelt und mit dem Team neue Funktionen umsetzt."
        )
        assert d.detect(text, 1)[0][0] == "de"

    def test_no_features_returns_empty(self) -> None:
        assert LangdetectDetector().detect("12345 !!!", 1) == []

    def test_satisfies_protocol(self) -> None:
        assert isinstance(LangdetectDetector(), LanguageDetector)
