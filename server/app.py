"""FastAPI server for vocanova application."""

import asyncio
import base64
import binascii
import logging
import os

import requests
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

logger = logging.getLogger(__name__)

from core.catalog import (
    get_catalog, get_categories, get_category_name, get_category_words,
    init_catalog, load_catalog_file
)
from core.config import DIFFICULTIES
from core.interfaces import NoSpeechError, RecognitionSource, Storage
from core.profile import (
    build_profile, default_profile, get_word_difficulty,
    get_personalized_tips, get_reward_messages
)
from core.session import PracticeSession
from core.utils import validate_user_id

from server.file_storage import FileStorage
from server.google_speech import GoogleSpeechRecognizer
from server.postgres_storage import PostgresStorage

NO_SPEECH_DETAIL = "No speech detected. Please speak the word clearly!"


# Pydantic models for API
class ScoreRequest(BaseModel):
    recognized_text: str
    user_id: str = "default"
    confidence: float = 0.0


class TranscribeRequest(BaseModel):
    audio_base64: str
    user_id: str = "default"


class UserRequest(BaseModel):
    user_id: str = "default"


class QuizRequest(BaseModel):
    answers: dict
    user_id: str = "default"


class WordResponse(BaseModel):
    category: str
    category_name: str
    word_index: int
    word_id: str
    words_in_category: int
    text: str
    phonetic: str
    ipa: str
    difficulty: str


class ScoreResponse(BaseModel):
    word_id: str
    target: str
    recognized_text: str
    confidence: float
    accuracy: float
    similarity: int
    tier: str
    feedback: str
    points_earned: int
    streak: int
    total_points: int


class StatsResponse(BaseModel):
    points: int
    streak: int
    total_attempts: int
    words_completed: int
    points_per_attempt: float
    average_accuracy: float


# Global state (in production, use proper DI)
storage: Storage = None
recognizer: RecognitionSource = None
persist_progress: bool = False
user_sessions: dict[str, PracticeSession] = {}


app = FastAPI(title="Vocanova API", description="Pronunciation practice API")


def checked_user(user_id: str) -> str:
    """Reject user ids that cannot be stored, as HTTP 400."""
    try:
        return validate_user_id(user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def get_session(user_id: str = "default") -> PracticeSession:
    """Get or create the practice session for a user."""
    checked_user(user_id)
    if user_id not in user_sessions:
        state = storage.load_progress(user_id) if persist_progress else None
        if state:
            user_sessions[user_id] = PracticeSession.from_dict(state)
        else:
            user_sessions[user_id] = PracticeSession()
    return user_sessions[user_id]


def save_session(user_id: str = "default") -> None:
    """Save a user's progress when persistence is enabled."""
    if persist_progress and user_id in user_sessions:
        storage.save_progress(user_sessions[user_id].to_dict(), user_id)


def word_response(session: PracticeSession) -> WordResponse:
    word = session.current_word()
    return WordResponse(
        category=session.category,
        category_name=get_category_name(session.category),
        word_index=session.word_index,
        word_id=session.word_id(),
        words_in_category=len(session.words),
        text=word.text,
        phonetic=word.phonetic,
        ipa=word.ipa,
        difficulty=word.difficulty
    )


def score_attempt(user_id: str, recognized_text: str, confidence: float) -> ScoreResponse:
    """Score recognized text for the user's current word."""
    session = get_session(user_id)
    word = session.current_word()
    word_id = session.word_id()
    try:
        result = session.submit(recognized_text)
    except NoSpeechError:
        logger.info(f"No speech for {user_id} on {word_id}")
        raise HTTPException(status_code=422, detail=NO_SPEECH_DETAIL)
    save_session(user_id)

    analysis = result['analysis']
    logger.info(f"Scored {user_id} on {word_id}: {recognized_text!r} -> "
                f"{analysis.accuracy:.1f} ({analysis.tier}), +{result['points_earned']} points")
    return ScoreResponse(
        word_id=word_id,
        target=word.text,
        recognized_text=analysis.recognized_text,
        confidence=confidence,
        accuracy=analysis.accuracy,
        similarity=analysis.similarity,
        tier=analysis.tier,
        feedback=analysis.feedback,
        points_earned=result['points_earned'],
        streak=result['streak'],
        total_points=session.ledger.points
    )


@app.on_event("startup")
async def startup():
    """Initialize storage, catalog and speech recognizer on startup."""
    global storage, recognizer, persist_progress

    # File storage by default, set VOCANOVA_STORAGE=postgres to use PostgreSQL
    storage_type = os.environ.get('VOCANOVA_STORAGE', 'file')
    if storage_type == 'postgres':
        storage = PostgresStorage()
        print("Using PostgreSQL storage")
    else:
        storage = FileStorage(state_dir=os.environ.get('VOCANOVA_STATE_DIR'))
        print("Using file storage")

    persist_progress = os.environ.get('VOCANOVA_PERSIST_PROGRESS', '0') == '1'
    user_sessions.clear()

    catalog_path = os.environ.get('VOCANOVA_CATALOG')
    if catalog_path:
        init_catalog(*load_catalog_file(catalog_path))
    else:
        init_catalog(None)
    catalog = get_catalog()
    print(f"Word catalog loaded: {sum(len(words) for words in catalog.values())} words "
          f"in {len(catalog)} categories")

    # Get API key from environment variable first, then fall back to config file
    api_key = os.environ.get('GOOGLE_STT_API_KEY')
    if not api_key:
        try:
            config = storage.load_config()
            api_key = config.get('google_stt_api_key')
        except FileNotFoundError:
            pass

    recognizer = None
    if api_key:
        try:
            recognizer = GoogleSpeechRecognizer(api_key)
            print("Speech recognizer initialized: Google Speech-to-Text")
        except ValueError as e:
            logger.error(f"Speech recognizer not available: {e}")
    else:
        print("GOOGLE_STT_API_KEY not set, audio transcription disabled")


@app.get("/")
async def root():
    """Health check."""
    return {"service": "vocanova", "status": "ok"}


@app.get("/api/categories")
async def list_categories():
    """List word categories."""
    return {
        "categories": [
            {"key": key, "name": get_category_name(key), "word_count": len(get_category_words(key))}
            for key in get_categories()
        ]
    }


@app.get("/api/categories/{category}/words")
async def list_category_words(category: str, difficulty: Optional[str] = None):
    """List the words of a category, optionally only one difficulty."""
    try:
        all_words = get_category_words(category)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
    if difficulty and difficulty not in DIFFICULTIES:
        raise HTTPException(status_code=400, detail=f"Difficulty must be one of {', '.join(DIFFICULTIES)}")

    positions = {id(word): i for i, word in enumerate(all_words)}
    words = [
        {"word_index": positions[id(word)], **word.to_dict()}
        for word in get_category_words(category, difficulty)
    ]
    return {"category": category, "name": get_category_name(category), "words": words}


@app.get("/api/practice/current", response_model=WordResponse)
async def get_current_word(user_id: str = "default", category: Optional[str] = None):
    """Get the word the user is practicing, switching category if asked."""
    session = get_session(user_id)
    if category:
        try:
            session.select_category(category)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Unknown category: {category}")
        save_session(user_id)
    return word_response(session)


@app.post("/api/practice/next", response_model=WordResponse)
async def next_word(request: UserRequest):
    """Move to the next word of the current category."""
    session = get_session(request.user_id)
    session.next_word()
    save_session(request.user_id)
    return word_response(session)


@app.post("/api/practice/score", response_model=ScoreResponse)
async def score_text(request: ScoreRequest):
    """Score already-recognized text against the current word."""
    return score_attempt(request.user_id, request.recognized_text, request.confidence)


@app.post("/api/practice/transcribe", response_model=ScoreResponse)
async def transcribe_and_score(request: TranscribeRequest):
    """Transcribe a recording, then score it against the current word."""
    checked_user(request.user_id)
    if recognizer is None:
        raise HTTPException(status_code=503, detail="Speech recognition is not configured")

    try:
        audio = base64.b64decode(request.audio_base64, validate=True)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=400, detail="audio_base64 is not valid base64")

    try:
        # Run in executor to not block the event loop
        loop = asyncio.get_event_loop()
        recognition = await loop.run_in_executor(None, lambda: recognizer.transcribe(audio))
    except NoSpeechError:
        raise HTTPException(status_code=422, detail=NO_SPEECH_DETAIL)
    except requests.RequestException as e:
        logger.error(f"Speech recognition failed for {request.user_id}: {e}")
        raise HTTPException(status_code=502, detail="Speech recognition service unavailable")

    return score_attempt(request.user_id, recognition.text, recognition.confidence)


@app.get("/api/stats", response_model=StatsResponse)
async def get_stats(user_id: str = "default"):
    """Get points and streak for a user."""
    return StatsResponse(**get_session(user_id).ledger.get_stats())


@app.post("/api/quiz")
async def save_quiz(request: QuizRequest):
    """Save onboarding quiz answers."""
    storage.save_quiz_results(request.answers, checked_user(request.user_id))
    return {"success": True, "user_id": request.user_id}


@app.get("/api/quiz")
async def get_quiz(user_id: str = "default"):
    """Get onboarding quiz answers."""
    return {
        "completed": storage.is_quiz_completed(checked_user(user_id)),
        "answers": storage.load_quiz_results(user_id)
    }


@app.delete("/api/quiz")
async def clear_quiz(user_id: str = "default"):
    """Forget onboarding quiz answers."""
    storage.clear_quiz_results(checked_user(user_id))
    return {"success": True}


@app.get("/api/profile")
async def get_profile(user_id: str = "default"):
    """Get the learner profile derived from quiz answers."""
    answers = storage.load_quiz_results(checked_user(user_id))
    profile = build_profile(answers) if answers is not None else default_profile()
    return {
        "quiz_completed": answers is not None,
        "profile": profile,
        "word_difficulty": get_word_difficulty(profile),
        "tips": get_personalized_tips(profile),
        "rewards": get_reward_messages(profile)
    }


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
