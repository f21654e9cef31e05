"""Practice session: walks a category of words and scores attempts."""

from .catalog import get_catalog, make_word_id
from .config import DEFAULT_CATEGORY
from .interfaces import NoSpeechError
from .models import ProgressLedger, WordEntry
from .scoring import analyze_pronunciation


class PracticeSession:
    """One learner's pass through the catalog, with its own ledger."""

    def __init__(self, catalog: dict = None, ledger: ProgressLedger = None,
                 category: str = DEFAULT_CATEGORY):
        self.catalog = catalog if catalog is not None else get_catalog()
        self.ledger = ledger if ledger is not None else ProgressLedger()
        if category not in self.catalog:
            category = next(iter(self.catalog))
        self.category = category
        self.word_index = 0
        self.last_result = None

    @property
    def words(self) -> list[WordEntry]:
        return self.catalog[self.category]

    def current_word(self) -> WordEntry:
        return self.words[self.word_index]

    def word_id(self) -> str:
        return make_word_id(self.category, self.word_index)

    def next_word(self) -> WordEntry:
        """Move to the next word, wrapping to the first after the last."""
        self.word_index = (self.word_index + 1) % len(self.words)
        self.last_result = None
        return self.current_word()

    def select_category(self, category: str) -> WordEntry:
        """Switch category and start from its first word. Raises KeyError."""
        if category not in self.catalog:
            raise KeyError(category)
        if category != self.category:
            self.category = category
            self.word_index = 0
            self.last_result = None
        return self.current_word()

    def submit(self, recognized_text: str) -> dict:
        """Score recognized text against the current word and award points.

        Blank text means nothing was heard; it raises NoSpeechError and the
        ledger is left alone.
        """
        if not recognized_text or not recognized_text.strip():
            raise NoSpeechError("No speech input detected - please speak clearly")

        analysis = analyze_pronunciation(recognized_text, self.current_word())
        points = self.ledger.add_score(analysis.accuracy, self.word_id())
        self.last_result = analysis
        return {
            'analysis': analysis,
            'points_earned': points,
            'streak': self.ledger.streak
        }

    def to_dict(self) -> dict:
        return {
            'category': self.category,
            'word_index': self.word_index,
            'ledger': self.ledger.to_dict()
        }

    @classmethod
    def from_dict(cls, data: dict, catalog: dict = None) -> 'PracticeSession':
        session = cls(
            catalog=catalog,
            ledger=ProgressLedger.from_dict(data.get('ledger', {})),
            category=data.get('category', DEFAULT_CATEGORY)
        )
        index = data.get('word_index', 0)
        session.word_index = index if 0 <= index < len(session.words) else 0
        return session
