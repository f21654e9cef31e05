from .models import WordEntry, RecognitionResult, AnalysisResult, ProgressLedger
from .interfaces import RecognitionSource, Storage, NoSpeechError
from .distance import edit_distance
from .scoring import similarity, phoneme_overlap, get_tier, analyze_pronunciation
from .catalog import CatalogError, load_catalog, load_catalog_file, get_catalog
from .session import PracticeSession
from .config import (
    EXCELLENT_THRESHOLD, GOOD_THRESHOLD, FAIR_THRESHOLD,
    COMMON_MISTAKE_FLOOR, DEFAULT_CATEGORY
)

__all__ = [
    'WordEntry', 'RecognitionResult', 'AnalysisResult', 'ProgressLedger',
    'RecognitionSource', 'Storage', 'NoSpeechError',
    'edit_distance',
    'similarity', 'phoneme_overlap', 'get_tier', 'analyze_pronunciation',
    'CatalogError', 'load_catalog', 'load_catalog_file', 'get_catalog',
    'PracticeSession',
    'EXCELLENT_THRESHOLD', 'GOOD_THRESHOLD', 'FAIR_THRESHOLD',
    'COMMON_MISTAKE_FLOOR', 'DEFAULT_CATEGORY'
]
