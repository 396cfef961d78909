# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: LangDetectDetector
# -----------------------------------------------------------------------------
from typing import Optional, Tuple

from langdetect import DetectorFactory, detect_langs
from langdetect.lang_detect_exception import LangDetectException

# langdetect is randomised unless seeded; chunk language must be stable across re-index runs
DetectorFactory.seed = 0

UNDETERMINED = "und"


class LangDetectDetector:
    def __init__(self, min_chars: int = 20, min_confidence: float = 0.5):
        self.min_chars = min_chars
        self.min_confidence = min_confidence

    def detect(self, text: str) -> Tuple[str, float]:
        if not text or len(text.strip()) < self.min_chars:
            return UNDETERMINED, 0.0

        try:
            detections = detect_langs(text)
        except LangDetectException:
            return UNDETERMINED, 0.0

        if not detections:
            return UNDETERMINED, 0.0

        top = detections[0]  # most probable language
        return top.lang, float(top.prob)

    def language_or(self, text: str, default: str) -> str:
        """Detected language code, or `default` when detection is weak/undetermined."""
        lang, confidence = self.detect(text)
        if lang == UNDETERMINED or confidence < self.min_confidence:
            return default
        return lang
