"""Pronunciation scoring: text similarity, character overlap and feedback."""

from .config import (
    EXCELLENT_THRESHOLD, GOOD_THRESHOLD, FAIR_THRESHOLD,
    COMMON_MISTAKE_FLOOR
)
from .distance import edit_distance
from .models import AnalysisResult, WordEntry
from .utils import normalize_text, letters_only, round_half_up, clamp


def similarity(recognized: str, target: str) -> int:
    """Edit-distance similarity of two strings as a 0-100 integer."""
    recognized = normalize_text(recognized)
    target = normalize_text(target)

    if recognized == target:
        return 100

    distance = edit_distance(recognized, target)
    max_len = max(len(recognized), len(target))
    score = max(0, (max_len - distance) / max_len) * 100
    return int(clamp(round_half_up(score)))


def phoneme_overlap(recognized: str, target: str) -> float:
    """Share of letters that match position by position, 0-100.

    Plain letters stand in for phonemes here; this is a heuristic and knows
    nothing about how the word actually sounds.
    """
    recognized = letters_only(recognized)
    target = letters_only(target)

    max_len = max(len(recognized), len(target))
    if max_len == 0:
        return 0.0

    matches = sum(1 for r, t in zip(recognized, target) if r == t)
    return (matches / max_len) * 100


def get_tier(accuracy: float) -> str:
    """Map an accuracy to excellent, good, fair or poor."""
    if accuracy >= EXCELLENT_THRESHOLD:
        return 'excellent'
    if accuracy >= GOOD_THRESHOLD:
        return 'good'
    if accuracy >= FAIR_THRESHOLD:
        return 'fair'
    return 'poor'


def is_common_mistake(recognized_text: str, word: WordEntry) -> bool:
    return normalize_text(recognized_text) in word.common_mistakes


def generate_feedback(accuracy: float, word: WordEntry, recognized_text: str) -> str:
    """Pick the tip for the accuracy tier, noting a known variant when heard."""
    feedback = word.tips[get_tier(accuracy)]
    if accuracy < EXCELLENT_THRESHOLD and is_common_mistake(recognized_text, word):
        feedback += f' I heard "{recognized_text.strip()}" - that\'s a common variation!'
    return feedback


def analyze_pronunciation(recognized_text: str, word: WordEntry) -> AnalysisResult:
    """Score a recognized utterance against a catalog word.

    Empty text is scored like any other input (it comes out low); deciding
    that nothing was said is the caller's job.
    """
    text_score = similarity(recognized_text, word.text)
    letter_score = phoneme_overlap(recognized_text, word.text)
    combined = (text_score + letter_score) / 2

    if is_common_mistake(recognized_text, word):
        combined = max(combined, COMMON_MISTAKE_FLOOR)

    accuracy = clamp(combined)
    return AnalysisResult(
        accuracy=accuracy,
        similarity=text_score,
        recognized_text=recognized_text,
        feedback=generate_feedback(accuracy, word, recognized_text),
        tier=get_tier(accuracy)
    )
