"""Domain models for vocanova application."""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType

from .config import (
    EXCELLENT_THRESHOLD, GOOD_THRESHOLD, FAIR_THRESHOLD,
    EXCELLENT_POINTS, EXCELLENT_MAX_MULTIPLIER,
    GOOD_POINTS, GOOD_MAX_MULTIPLIER,
    FAIR_POINTS, PARTICIPATION_POINTS
)
from .utils import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WordEntry:
    """A practice word from the catalog. Never mutated after load."""

    text: str
    phonetic: str
    difficulty: str
    common_mistakes: frozenset = field(default_factory=frozenset)
    tips: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    ipa: str = ''

    def to_dict(self) -> dict:
        return {
            'text': self.text,
            'phonetic': self.phonetic,
            'ipa': self.ipa,
            'difficulty': self.difficulty,
            'common_mistakes': sorted(self.common_mistakes),
            'tips': dict(self.tips)
        }


class RecognitionResult:
    """Text recognized from one recording attempt."""

    def __init__(self, text: str, confidence: float = 0.0):
        self.text = text
        self.confidence = confidence

    def to_dict(self) -> dict:
        return {'text': self.text, 'confidence': self.confidence}

    def __repr__(self) -> str:
        return f"RecognitionResult(text={self.text!r}, confidence={self.confidence})"


class AnalysisResult:
    """Outcome of scoring one utterance against a word."""

    def __init__(self, accuracy: float, similarity: int, recognized_text: str,
                 feedback: str, tier: str):
        self.accuracy = accuracy
        self.similarity = similarity
        self.recognized_text = recognized_text
        self.feedback = feedback
        self.tier = tier

    def to_dict(self) -> dict:
        return {
            'accuracy': self.accuracy,
            'similarity': self.similarity,
            'recognized_text': self.recognized_text,
            'feedback': self.feedback,
            'tier': self.tier
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, AnalysisResult):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"AnalysisResult({self.to_dict()!r})"


class ProgressLedger:
    """Tracks points and streak for one practice session."""

    def __init__(self):
        self.points = 0
        self.streak = 0
        self.total_attempts = 0
        self.words_completed = set()

    def add_score(self, accuracy: float, word_id: str) -> int:
        """Record an attempt and return the points it earned."""
        if accuracy < 0 or accuracy > 100:
            logger.warning(f"Accuracy {accuracy} out of range for {word_id}, clamping")
            accuracy = clamp(accuracy)

        self.total_attempts += 1

        if accuracy >= EXCELLENT_THRESHOLD:
            self.streak += 1
            earned = EXCELLENT_POINTS * min(self.streak, EXCELLENT_MAX_MULTIPLIER)
            self.words_completed.add(word_id)
        elif accuracy >= GOOD_THRESHOLD:
            self.streak += 1
            earned = GOOD_POINTS * min(self.streak, GOOD_MAX_MULTIPLIER)
        elif accuracy >= FAIR_THRESHOLD:
            earned = FAIR_POINTS
            self.streak = max(0, self.streak - 1)
        else:
            earned = PARTICIPATION_POINTS
            self.streak = 0

        self.points += earned
        return earned

    def get_stats(self) -> dict:
        """Snapshot of the ledger.

        average_accuracy is points per attempt, not a mean accuracy; it is
        kept under that name for existing clients, points_per_attempt is the
        same number.
        """
        per_attempt = self.points / self.total_attempts if self.total_attempts > 0 else 0
        return {
            'points': self.points,
            'streak': self.streak,
            'total_attempts': self.total_attempts,
            'words_completed': len(self.words_completed),
            'points_per_attempt': per_attempt,
            'average_accuracy': per_attempt
        }

    def to_dict(self) -> dict:
        return {
            'points': self.points,
            'streak': self.streak,
            'total_attempts': self.total_attempts,
            'words_completed': sorted(self.words_completed)
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ProgressLedger':
        ledger = cls()
        ledger.points = data.get('points', 0)
        ledger.streak = data.get('streak', 0)
        ledger.total_attempts = data.get('total_attempts', 0)
        ledger.words_completed = set(data.get('words_completed', []))
        return ledger
