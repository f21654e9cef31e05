"""Google Speech-to-Text recognizer."""

import base64
import logging
import time

import requests

from core.interfaces import NoSpeechError, RecognitionSource
from core.models import RecognitionResult
from core.config import (
    STT_LANGUAGE_CODE, STT_MODEL, STT_MIN_AUDIO_BYTES,
    STT_DEFAULT_CONFIDENCE, STT_MIN_API_KEY_LENGTH
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

RECOGNIZE_URL = 'https://speech.googleapis.com/v1/speech:recognize'


class GoogleSpeechRecognizer(RecognitionSource):
    """Transcribes short recordings with the Google Speech-to-Text REST API."""

    def __init__(self, api_key: str, session: requests.Session = None, timeout: float = 30):
        if not api_key or len(api_key) < STT_MIN_API_KEY_LENGTH:
            raise ValueError("Invalid API key provided")
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout
        self.stats = {'calls': 0, 'total_ms': 0, 'no_speech': 0}

    def _build_request(self, audio: bytes) -> dict:
        return {
            'config': {
                'languageCode': STT_LANGUAGE_CODE,
                'enableAutomaticPunctuation': False,
                'enableWordTimeOffsets': False,
                'model': STT_MODEL
            },
            'audio': {
                'content': base64.b64encode(audio).decode('ascii')
            }
        }

    def _parse_response(self, result: dict) -> RecognitionResult:
        results = result.get('results') or []
        if not results:
            logger.info("No speech detected: no transcription results in API response")
            raise NoSpeechError("No speech input detected - please speak clearly")

        alternatives = results[0].get('alternatives') or []
        alternative = alternatives[0] if alternatives else None
        transcript = alternative.get('transcript') if alternative else None
        if not isinstance(transcript, str) or not transcript.strip():
            logger.info(f"No speech detected: empty transcript ({alternative})")
            raise NoSpeechError("No speech input detected - please speak clearly")

        confidence = alternative.get('confidence') or STT_DEFAULT_CONFIDENCE
        return RecognitionResult(transcript, confidence)

    def transcribe(self, audio: bytes) -> RecognitionResult:
        if len(audio) < STT_MIN_AUDIO_BYTES:
            logger.info(f"No speech detected: audio too small ({len(audio)} bytes)")
            self.stats['no_speech'] += 1
            raise NoSpeechError("No speech input detected - audio file too small")

        start_time = time.time()
        response = self.session.post(
            RECOGNIZE_URL,
            params={'key': self.api_key},
            json=self._build_request(audio),
            timeout=self.timeout
        )
        ms = int((time.time() - start_time) * 1000)
        self.stats['calls'] += 1
        self.stats['total_ms'] += ms

        if not response.ok:
            logger.error(f"Speech API request failed with status {response.status_code}: {response.text}")
        response.raise_for_status()

        try:
            recognition = self._parse_response(response.json())
        except NoSpeechError:
            self.stats['no_speech'] += 1
            raise
        logger.info(f"Transcribed {len(audio)} bytes in {ms}ms: {recognition.text!r} "
                    f"(confidence {recognition.confidence})")
        return recognition

    def get_stats(self) -> dict:
        calls = self.stats['calls']
        return {
            **self.stats,
            'avg_ms': round(self.stats['total_ms'] / calls, 1) if calls > 0 else 0
        }
