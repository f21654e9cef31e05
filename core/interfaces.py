"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod

from .models import RecognitionResult


class NoSpeechError(Exception):
    """Raised when a recording or transcript contains no usable speech."""


class RecognitionSource(ABC):
    """Abstract base class for speech-to-text services."""

    @abstractmethod
    def transcribe(self, audio: bytes) -> RecognitionResult:
        """Transcribe recorded audio. Raises NoSpeechError on silence."""
        pass


class Storage(ABC):
    """Abstract base class for config, progress and onboarding storage."""

    @abstractmethod
    def load_config(self) -> dict:
        """Load configuration. Returns config dict."""
        pass

    @abstractmethod
    def load_progress(self, user_id: str = "default") -> dict | None:
        """Load session progress for a user. Returns state dict or None if not found."""
        pass

    @abstractmethod
    def save_progress(self, state: dict, user_id: str = "default") -> None:
        """Save session progress for a user."""
        pass

    @abstractmethod
    def save_quiz_results(self, results: dict, user_id: str = "default") -> None:
        """Save onboarding quiz answers and mark the quiz completed."""
        pass

    @abstractmethod
    def load_quiz_results(self, user_id: str = "default") -> dict | None:
        """Load onboarding quiz answers. Returns None if not answered."""
        pass

    @abstractmethod
    def is_quiz_completed(self, user_id: str = "default") -> bool:
        """Check whether the user finished the onboarding quiz."""
        pass

    @abstractmethod
    def clear_quiz_results(self, user_id: str = "default") -> None:
        """Forget onboarding quiz answers."""
        pass
