"""
Language Detector
Script-based heuristic for guessing the natural language of a question.

Each supported language is scored by how many of its script characters appear
in the text. English is the exception: it scores only when the WHOLE text is
ASCII letters and whitespace.

Known ambiguity: Hindi and Marathi share the Devanagari block, so this heuristic
cannot tell them apart. Ties resolve to the earlier entry in LANGUAGE_TABLE,
which means Devanagari text is reported as Hindi. Callers that know the user's
locale should pass an explicit language instead of relying on detection.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Pattern


@dataclass(frozen=True)
class DetectedLanguage:
    """
    Result of language detection.

    Attributes:
        name: Display name, e.g. "Hindi"
        code: ISO 639-1 code, e.g. "hi"
        confidence: 0.0-1.0. Exactly 0.0 (no usable input) and 0.5 (no script
            matched) are sentinels for "defaulted to English", not measurements.
    """
    name: str
    code: str
    confidence: float

    @property
    def is_english(self) -> bool:
        return self.code == "en"


@dataclass(frozen=True)
class LanguageRule:
    key: str
    name: str
    code: str
    pattern: Pattern
    whole_text: bool = False


# Ordered: earlier rules win ties.
LANGUAGE_TABLE: List[LanguageRule] = [
    LanguageRule("hindi", "Hindi", "hi", re.compile(r"[ऀ-ॿ]")),
    LanguageRule("english", "English", "en", re.compile(r"[a-zA-Z\s]+"), whole_text=True),
    LanguageRule("bengali", "Bengali", "bn", re.compile(r"[ঀ-৿]")),
    LanguageRule("telugu", "Telugu", "te", re.compile(r"[ఀ-౿]")),
    LanguageRule("tamil", "Tamil", "ta", re.compile(r"[஀-௿]")),
    LanguageRule("gujarati", "Gujarati", "gu", re.compile(r"[઀-૿]")),
    LanguageRule("kannada", "Kannada", "kn", re.compile(r"[ಀ-೿]")),
    LanguageRule("malayalam", "Malayalam", "ml", re.compile(r"[ഀ-ൿ]")),
    # Same block as Hindi; never wins a tie against it.
    LanguageRule("marathi", "Marathi", "mr", re.compile(r"[ऀ-ॿ]")),
    LanguageRule("punjabi", "Punjabi", "pa", re.compile(r"[਀-੿]")),
    LanguageRule("urdu", "Urdu", "ur", re.compile(r"[؀-ۿ]")),
]

ENGLISH = DetectedLanguage("English", "en", 0.5)
NO_INPUT = DetectedLanguage("English", "en", 0.0)


class LanguageDetector:
    """
    Scores text against LANGUAGE_TABLE and picks the best match.
    """

    def __init__(self, rules: Optional[List[LanguageRule]] = None):
        self.rules = rules if rules is not None else LANGUAGE_TABLE

    @staticmethod
    def _score(rule: LanguageRule, text: str) -> int:
        if rule.whole_text:
            # Full-text match counts every character as matched.
            return len(text) if rule.pattern.fullmatch(text) else 0
        return len(rule.pattern.findall(text))

    def detect(self, text) -> DetectedLanguage:
        """
        Detect the language of a text fragment.

        Args:
            text: Question text. Anything that is not a non-empty string yields
                English with confidence 0.

        Returns:
            DetectedLanguage
        """
        if not isinstance(text, str) or not text:
            return NO_INPUT

        best_rule = None
        best_score = 0
        for rule in self.rules:
            score = self._score(rule, text)
            if score > best_score:
                best_rule, best_score = rule, score

        if best_rule is None:
            return ENGLISH

        return DetectedLanguage(
            name=best_rule.name,
            code=best_rule.code,
            confidence=min(best_score / len(text), 1.0),
        )


def language_from_hint(hint) -> Optional[DetectedLanguage]:
    """
    Resolve a caller-supplied language hint.

    Accepts a DetectedLanguage, or an ISO code / name such as "mr" or "Marathi".
    This is how callers pick Marathi over Hindi for Devanagari text.

    Returns:
        DetectedLanguage with confidence 1.0, or None if the hint is unknown
    """
    if isinstance(hint, DetectedLanguage):
        return hint
    if not isinstance(hint, str) or not hint.strip():
        return None

    wanted = hint.strip().lower()
    for rule in LANGUAGE_TABLE:
        if wanted in (rule.code, rule.key):
            return DetectedLanguage(name=rule.name, code=rule.code, confidence=1.0)
    return None


_default_detector = LanguageDetector()


def detect_language(text) -> DetectedLanguage:
    """Module-level shortcut using the default rule table."""
    return _default_detector.detect(text)


def main():
    """Test language detection on a few samples."""
    samples = [
        "What is photosynthesis",
        "प्रकाश संश्लेषण क्या है?",
        "ஒளிச்சேர்க்கை என்றால் என்ன?",
        "2 + 2 = ?",
    ]
    for sample in samples:
        result = detect_language(sample)
        print(f"{sample:40} → {result.name} ({result.code}, {result.confidence:.2f})")


if __name__ == "__main__":
    main()
