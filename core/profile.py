"""Learner profile built from onboarding quiz answers."""


def _as_list(value) -> list:
    """Quiz answers may hold one choice or several."""
    if isinstance(value, list):
        return value
    return [value] if value else []


def _parse_age(value, default: int = 10) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def build_profile(quiz_results: dict) -> dict:
    """Turn raw quiz answers into a profile, filling in defaults."""
    return {
        'name': quiz_results.get('name') or 'Friend',
        'age': _parse_age(quiz_results.get('age')),
        'gender': quiz_results.get('gender') or 'prefer_not',
        'voice': {
            'volume': quiz_results.get('voice_volume') or 'normal',
            'pitch': quiz_results.get('voice_pitch') or 'medium',
            'speed': quiz_results.get('voice_speed') or 'normal'
        },
        'communication_preference': quiz_results.get('communication_preference') or 'speaking',
        'social_comfort': quiz_results.get('social_comfort') or 'okay',
        'challenges': _as_list(quiz_results.get('communication_challenges')),
        'goals': _as_list(quiz_results.get('improvement_goals')),
        'interests': _as_list(quiz_results.get('interests')),
        'excitement_expression': quiz_results.get('excitement_expression') or 'smile',
        'text_responses': {
            key: quiz_results.get(key) or ''
            for key in ('fun_activities', 'family_description', 'favorite_activity',
                        'proud_moment', 'happy_safe')
        }
    }


def default_profile() -> dict:
    """Profile for users who have not taken the quiz."""
    profile = build_profile({})
    profile['age'] = 12
    profile['challenges'] = ['nervous']
    profile['goals'] = ['confidence']
    profile['interests'] = ['games']
    return profile


def get_word_difficulty(profile: dict) -> str:
    age = profile.get('age', 10)
    if age <= 8:
        return 'easy'
    if age <= 16:
        return 'medium'
    return 'hard'


def get_personalized_tips(profile: dict) -> list[str]:
    tips = []
    challenges = profile.get('challenges', [])
    if 'nervous' in challenges:
        tips.append("Take deep breaths - you're doing great!")
    if 'sounds' in challenges:
        tips.append("Practice makes perfect - keep trying!")
    if 'words' in challenges:
        tips.append("It's okay to take your time finding the right words.")
    if 'eye_contact' in challenges:
        tips.append("You don't have to look at people if it feels uncomfortable.")
    return tips


def get_reward_messages(profile: dict) -> dict:
    """Encouragement style picked from the learner's goals."""
    goals = profile.get('goals', [])
    if 'confidence' in goals:
        return {
            'type': 'confidence_building',
            'messages': [
                "You're getting more confident every day!",
                "I'm so proud of your progress!",
                "You're doing amazing!"
            ]
        }
    if 'speaking_clearly' in goals:
        return {
            'type': 'pronunciation_focus',
            'messages': [
                "Great pronunciation!",
                "Your speech is getting clearer!",
                "Perfect! Keep practicing!"
            ]
        }
    return {
        'type': 'general',
        'messages': ["Great job!", "You're doing well!", "Keep it up!"]
    }
