"""Configuration constants for vocanova application."""

DEFAULT_CATEGORY = 'food'
DIFFICULTIES = ('easy', 'medium', 'hard')

# Feedback tiers (lower bound of each tier, evaluated high to low)
EXCELLENT_THRESHOLD = 90
GOOD_THRESHOLD = 75
FAIR_THRESHOLD = 60
TIERS = ('excellent', 'good', 'fair', 'poor')

# Known mis-transcriptions never score below this
COMMON_MISTAKE_FLOOR = 65

# Points awarded per attempt
EXCELLENT_POINTS = 15
EXCELLENT_MAX_MULTIPLIER = 5
GOOD_POINTS = 10
GOOD_MAX_MULTIPLIER = 3
FAIR_POINTS = 5
PARTICIPATION_POINTS = 2

# Speech recognition
STT_LANGUAGE_CODE = 'en-US'
STT_MODEL = 'phone_call'
STT_MIN_AUDIO_BYTES = 1000    # Anything smaller is treated as silence
STT_DEFAULT_CONFIDENCE = 0.8
STT_MIN_API_KEY_LENGTH = 20

# Score colour bands (presentation only)
COLOR_GREEN_THRESHOLD = 85
COLOR_LIME_THRESHOLD = 70
COLOR_YELLOW_THRESHOLD = 55
