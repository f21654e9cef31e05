"""Static catalog of practice words grouped by topic."""

import json
from types import MappingProxyType

from .config import DIFFICULTIES, TIERS
from .models import WordEntry


class CatalogError(ValueError):
    """Raised when catalog data cannot be turned into valid word entries."""


WORD_CATALOG = {
    'food': {
        'name': 'Food',
        'words': [
            {
                'text': 'Tomatoes',
                'phonetic': 'tuh-MAY-tohs',
                'ipa': '/təˈmeɪtoʊz/',
                'difficulty': 'medium',
                'common_mistakes': ['tomatos', 'tomatoe'],
                'tips': {
                    'excellent': "Perfect pronunciation! 🎉 You nailed the stress on 'MAY'!",
                    'good': "Great job! Try emphasizing the 'MAY' sound a bit more.",
                    'fair': "Good attempt! Focus on three syllables: 'tuh-MAY-tohs'.",
                    'poor': "Keep practicing! Break it down: 'tuh' + 'MAY' + 'tohs'"
                }
            },
            {
                'text': 'Apple',
                'phonetic': 'AP-uhl',
                'ipa': '/ˈæpəl/',
                'difficulty': 'easy',
                'common_mistakes': ['apel', 'aple'],
                'tips': {
                    'excellent': "Fantastic! Crystal clear pronunciation! 🍎",
                    'good': "Well done! The short 'A' sound was perfect.",
                    'fair': "Nice try! Make the 'AP' sound stronger and shorter.",
                    'poor': "Practice the short 'A' sound: 'AP-uhl' (not 'ay-pul')"
                }
            },
            {
                'text': 'Banana',
                'phonetic': 'buh-NAN-uh',
                'ipa': '/bəˈnænə/',
                'difficulty': 'easy',
                'common_mistakes': ['bananna', 'banan'],
                'tips': {
                    'excellent': "Excellent! Perfect rhythm and stress! 🍌",
                    'good': "Great! All three syllables were clear.",
                    'fair': "Good effort! Emphasize the middle 'NAN' more.",
                    'poor': "Break it down: 'buh' + 'NAN' + 'uh' - stress the middle!"
                }
            },
            {
                'text': 'Orange',
                'phonetic': 'OR-inj',
                'ipa': '/ˈɔrɪndʒ/',
                'difficulty': 'medium',
                'common_mistakes': ['ornge', 'orang'],
                'tips': {
                    'excellent': "Perfect! The 'OR' and soft 'J' were spot on! 🧡",
                    'good': "Well done! Nice clear 'OR' sound at the start.",
                    'fair': "Good try! Remember it ends with a soft 'J' sound.",
                    'poor': "Practice: 'OR-inj' - start strong, end with soft 'J'"
                }
            },
            {
                'text': 'Strawberry',
                'phonetic': 'STRAW-ber-ee',
                'ipa': '/ˈstrɔˌbɛri/',
                'difficulty': 'hard',
                'common_mistakes': ['strawbery', 'strawberi'],
                'tips': {
                    'excellent': "Amazing! All three syllables perfect! 🍓",
                    'good': "Great job! The 'STRAW' beginning was excellent.",
                    'fair': "Good attempt! Work on 'STRAW-ber-ee' rhythm.",
                    'poor': "This is tricky! Three parts: 'STRAW' + 'ber' + 'ee'"
                }
            },
            {
                'text': 'Chocolate',
                'phonetic': 'CHAWK-lit',
                'ipa': '/ˈtʃɔklət/',
                'difficulty': 'medium',
                'common_mistakes': ['choclate', 'chocolit'],
                'tips': {
                    'excellent': "Perfect! The 'CH' and 'K' sounds were clear! 🍫",
                    'good': "Well done! Nice emphasis on 'CHAWK'.",
                    'fair': "Good try! Remember: 'CHAWK-lit' (not choc-o-late).",
                    'poor': "Two syllables: 'CHAWK' + 'lit' - drop the middle 'o'!"
                }
            }
        ]
    },
    'animals': {
        'name': 'Animals',
        'words': [
            {
                'text': 'Elephant',
                'phonetic': 'EL-uh-fuhnt',
                'ipa': '/ˈɛləfənt/',
                'difficulty': 'hard',
                'common_mistakes': ['elefant', 'eliphant'],
                'tips': {
                    'excellent': "Amazing! You mastered this challenging word! 🐘",
                    'good': "Great! The stress on 'EL' was perfect.",
                    'fair': "Good try! Three syllables: 'EL-uh-fuhnt'.",
                    'poor': "Break it down: 'EL' (strong) + 'uh' + 'fuhnt'"
                }
            },
            {
                'text': 'Butterfly',
                'phonetic': 'BUT-er-fly',
                'ipa': '/ˈbʌtərˌflaɪ/',
                'difficulty': 'medium',
                'common_mistakes': ['buterfly', 'butterfy'],
                'tips': {
                    'excellent': "Perfect! Beautiful pronunciation! 🦋",
                    'good': "Excellent! All three syllables were clear.",
                    'fair': "Nice! Work on the 'fly' ending - make it rise.",
                    'poor': "Three parts: 'BUT' + 'er' + 'fly' (like the insect + fly)"
                }
            },
            {
                'text': 'Tiger',
                'phonetic': 'TY-gur',
                'ipa': '/ˈtaɪgər/',
                'difficulty': 'easy',
                'common_mistakes': ['tiger', 'tyger'],
                'tips': {
                    'excellent': "Excellent! Perfect 'TY' sound! 🐅",
                    'good': "Great! The long 'I' in 'TY' was spot on.",
                    'fair': "Good! Make sure 'TY' sounds like 'tie', not 'ti'.",
                    'poor': "Practice: 'TY' (like 'tie') + 'gur' - two syllables"
                }
            },
            {
                'text': 'Penguin',
                'phonetic': 'PENG-gwin',
                'ipa': '/ˈpɛŋgwɪn/',
                'difficulty': 'medium',
                'common_mistakes': ['penquin', 'pengwing'],
                'tips': {
                    'excellent': "Perfect! The 'NG' sound was excellent! 🐧",
                    'good': "Great job! Nice clear 'PENG' beginning.",
                    'fair': "Good attempt! End with 'gwin', not 'gwin-g'.",
                    'poor': "Two parts: 'PENG' + 'gwin' - no extra 'g' at the end!"
                }
            }
        ]
    },
    'colors': {
        'name': 'Colors',
        'words': [
            {
                'text': 'Purple',
                'phonetic': 'PUR-puhl',
                'ipa': '/ˈpɜrpəl/',
                'difficulty': 'medium',
                'common_mistakes': ['purpel', 'perpul'],
                'tips': {
                    'excellent': "Perfect! Both 'R' sounds were clear! 💜",
                    'good': "Great! Nice emphasis on 'PUR'.",
                    'fair': "Good try! Make both 'R' sounds stronger.",
                    'poor': "Practice: 'PUR' (like purr) + 'puhl' - roll those R's!"
                }
            },
            {
                'text': 'Yellow',
                'phonetic': 'YEL-oh',
                'ipa': '/ˈjɛloʊ/',
                'difficulty': 'easy',
                'common_mistakes': ['yelow', 'yello'],
                'tips': {
                    'excellent': "Fantastic! Clear and bright like the color! 💛",
                    'good': "Well done! The 'YEL' was perfect.",
                    'fair': "Nice! End with 'oh' sound, not 'ow'.",
                    'poor': "Two parts: 'YEL' + 'oh' - simple and clear!"
                }
            }
        ]
    },
    'emotions': {
        'name': 'Emotions',
        'words': [
            {
                'text': 'Happy',
                'phonetic': 'HAP-ee',
                'ipa': '/ˈhæpi/',
                'difficulty': 'easy',
                'common_mistakes': ['hapy', 'hapey'],
                'tips': {
                    'excellent': "Perfect! You sound happy saying it! 😊",
                    'good': "Great! The short 'A' sound was clear.",
                    'fair': "Good! Make sure both P's are pronounced.",
                    'poor': "Two syllables: 'HAP' + 'ee' - double P in the middle!"
                }
            },
            {
                'text': 'Excited',
                'phonetic': 'ik-SY-tid',
                'ipa': '/ɪkˈsaɪtɪd/',
                'difficulty': 'hard',
                'common_mistakes': ['exited', 'exciteed'],
                'tips': {
                    'excellent': "Excellent! Your excitement shows! 🎉",
                    'good': "Great! The stress on 'SY' was perfect.",
                    'fair': "Good try! Three syllables: 'ik-SY-tid'.",
                    'poor': "Break it down: 'ik' + 'SY' (like 'sigh') + 'tid'"
                }
            }
        ]
    }
}


def _build_entry(category: str, index: int, raw: dict) -> WordEntry:
    """Validate one raw word dict and freeze it into a WordEntry."""
    where = f"{category}[{index}]"
    text = (raw.get('text') or '').strip()
    if not text:
        raise CatalogError(f"{where}: word text is empty")

    difficulty = raw.get('difficulty', 'medium')
    if difficulty not in DIFFICULTIES:
        raise CatalogError(f"{where} ({text}): unknown difficulty {difficulty!r}")

    tips = raw.get('tips') or {}
    missing = [tier for tier in TIERS if not tips.get(tier)]
    if missing:
        raise CatalogError(f"{where} ({text}): missing tips for {', '.join(missing)}")

    return WordEntry(
        text=text,
        phonetic=raw.get('phonetic', ''),
        difficulty=difficulty,
        common_mistakes=frozenset(m.lower().strip() for m in raw.get('common_mistakes', [])),
        tips=MappingProxyType({tier: tips[tier] for tier in TIERS}),
        ipa=raw.get('ipa', '')
    )


def load_catalog(data: dict = None) -> dict[str, list[WordEntry]]:
    """Build validated word entries from catalog data.

    Uses the embedded WORD_CATALOG when no data is given. Raises
    CatalogError on the first invalid entry.
    """
    if data is None:
        data = WORD_CATALOG

    catalog = {}
    for category, group in data.items():
        words = group.get('words') or []
        if not words:
            raise CatalogError(f"Category {category!r} has no words")
        catalog[category] = [_build_entry(category, i, raw) for i, raw in enumerate(words)]
    return catalog


def category_names(data: dict) -> dict[str, str]:
    """Display names declared in raw catalog data, keyed by category."""
    return {category: group.get('name') or category.capitalize() for category, group in data.items()}


CATEGORY_DISPLAY_NAMES = category_names(WORD_CATALOG)

_catalog = None
_names = dict(CATEGORY_DISPLAY_NAMES)


def load_catalog_file(path: str) -> tuple[dict[str, list[WordEntry]], dict[str, str]]:
    """Load and validate a catalog from a JSON file shaped like WORD_CATALOG.

    Returns the catalog and its category display names.
    """
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog file {path} must contain an object of categories")
    return load_catalog(data), category_names(data)


def init_catalog(catalog: dict[str, list[WordEntry]] | None, names: dict[str, str] = None) -> None:
    """Replace the default catalog and its display names (None restores the embedded one)."""
    global _catalog, _names
    _catalog = catalog
    _names = dict(names) if catalog is not None and names else dict(CATEGORY_DISPLAY_NAMES)


def get_catalog() -> dict[str, list[WordEntry]]:
    """Default catalog, loaded on first use."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog


def get_categories() -> list[str]:
    return list(get_catalog().keys())


def get_category_name(category: str) -> str:
    """Get display name for a category."""
    return _names.get(category, category.capitalize())


def get_category_words(category: str, difficulty: str = None) -> list[WordEntry]:
    """Words of a category, optionally only one difficulty. Raises KeyError."""
    words = get_catalog()[category]
    if difficulty:
        words = [w for w in words if w.difficulty == difficulty]
    return words


def get_word(category: str, index: int) -> WordEntry:
    """Word at index in a category, wrapping past the end."""
    words = get_category_words(category)
    return words[index % len(words)]


def make_word_id(category: str, index: int) -> str:
    return f"{category}-{index}"
