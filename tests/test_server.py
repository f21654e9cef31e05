"""Tests for the vocanova REST API."""

import base64
import json
import os
import tempfile
import unittest
from unittest.mock import patch

import requests
from fastapi.testclient import TestClient

import server.app as app_module
from core.catalog import init_catalog
from core.interfaces import NoSpeechError, RecognitionSource
from core.models import RecognitionResult


class StubRecognizer(RecognitionSource):
    """Recognizer returning a fixed transcript, or raising a given error."""

    def __init__(self, text: str = '', error: Exception = None):
        self.text = text
        self.error = error

    def transcribe(self, audio: bytes) -> RecognitionResult:
        if self.error:
            raise self.error
        return RecognitionResult(self.text, 0.95)


AUDIO_B64 = base64.b64encode(b'\x00' * 2000).decode('ascii')


class ServerTestCase(unittest.TestCase):
    persist = '0'
    catalog_data = None

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.state_dir = os.path.join(self.tmp.name, 'state')

        env = patch.dict(os.environ, {
            'HOME': self.tmp.name,
            'VOCANOVA_STORAGE': 'file',
            'VOCANOVA_STATE_DIR': self.state_dir,
            'VOCANOVA_PERSIST_PROGRESS': self.persist
        })
        env.start()
        self.addCleanup(env.stop)
        os.environ.pop('GOOGLE_STT_API_KEY', None)
        os.environ.pop('VOCANOVA_CATALOG', None)

        if self.catalog_data is not None:
            path = os.path.join(self.tmp.name, 'catalog.json')
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(self.catalog_data, f)
            os.environ['VOCANOVA_CATALOG'] = path
            self.addCleanup(init_catalog, None)

        self.client = self.start_client()

    def start_client(self) -> TestClient:
        client = TestClient(app_module.create_app())
        client.__enter__()
        self.addCleanup(client.__exit__, None, None, None)
        return client

    def score(self, text: str, user_id: str = 'default'):
        return self.client.post('/api/practice/score',
                                json={'recognized_text': text, 'user_id': user_id})


class TestCatalogEndpoints(ServerTestCase):

    def test_root(self):
        self.assertEqual(self.client.get('/').json(), {'service': 'vocanova', 'status': 'ok'})

    def test_categories(self):
        categories = self.client.get('/api/categories').json()['categories']
        self.assertEqual([c['key'] for c in categories], ['food', 'animals', 'colors', 'emotions'])
        self.assertEqual(categories[0], {'key': 'food', 'name': 'Food', 'word_count': 6})

    def test_category_words_by_difficulty(self):
        response = self.client.get('/api/categories/food/words', params={'difficulty': 'easy'})
        self.assertEqual(response.status_code, 200)
        words = response.json()['words']
        self.assertEqual([w['text'] for w in words], ['Apple', 'Banana'])
        self.assertEqual(words[0]['word_index'], 1)

    def test_unknown_category_words(self):
        self.assertEqual(self.client.get('/api/categories/vehicles/words').status_code, 404)

    def test_bad_difficulty(self):
        response = self.client.get('/api/categories/food/words', params={'difficulty': 'extreme'})
        self.assertEqual(response.status_code, 400)


class TestPracticeEndpoints(ServerTestCase):

    def test_current_word(self):
        word = self.client.get('/api/practice/current').json()
        self.assertEqual(word['text'], 'Tomatoes')
        self.assertEqual(word['word_id'], 'food-0')
        self.assertEqual(word['words_in_category'], 6)

    def test_switch_category(self):
        word = self.client.get('/api/practice/current', params={'category': 'animals'}).json()
        self.assertEqual(word['text'], 'Elephant')
        self.assertEqual(word['category_name'], 'Animals')

    def test_switch_unknown_category(self):
        response = self.client.get('/api/practice/current', params={'category': 'vehicles'})
        self.assertEqual(response.status_code, 404)

    def test_next_word_wraps(self):
        self.client.get('/api/practice/current', params={'category': 'colors'})
        self.assertEqual(self.client.post('/api/practice/next', json={}).json()['text'], 'Yellow')
        self.assertEqual(self.client.post('/api/practice/next', json={}).json()['text'], 'Purple')

    def test_score_exact(self):
        result = self.score('tomatoes').json()
        self.assertEqual(result['accuracy'], 100)
        self.assertEqual(result['tier'], 'excellent')
        self.assertEqual(result['points_earned'], 15)
        self.assertEqual(result['streak'], 1)
        self.assertEqual(result['total_points'], 15)
        self.assertEqual(result['target'], 'Tomatoes')

    def test_score_common_mistake(self):
        self.client.post('/api/practice/next', json={})
        result = self.score('apel').json()
        self.assertEqual(result['word_id'], 'food-1')
        self.assertEqual(result['accuracy'], 65)
        self.assertEqual(result['tier'], 'fair')
        self.assertEqual(result['points_earned'], 5)
        self.assertIn('common variation', result['feedback'])

    def test_blank_text_is_no_speech(self):
        response = self.score('   ')
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()['detail'], app_module.NO_SPEECH_DETAIL)
        self.assertEqual(self.client.get('/api/stats').json()['total_attempts'], 0)

    def test_stats(self):
        self.score('tomatoes')
        self.score('xyz')
        stats = self.client.get('/api/stats').json()
        self.assertEqual(stats['points'], 17)
        self.assertEqual(stats['streak'], 0)
        self.assertEqual(stats['total_attempts'], 2)
        self.assertEqual(stats['words_completed'], 1)
        self.assertEqual(stats['average_accuracy'], 8.5)

    def test_users_are_isolated(self):
        self.score('tomatoes', user_id='alice')
        self.assertEqual(self.client.get('/api/stats', params={'user_id': 'bob'}).json()['points'], 0)
        self.assertEqual(self.client.get('/api/stats', params={'user_id': 'alice'}).json()['points'], 15)

    def test_progress_not_persisted_by_default(self):
        self.score('tomatoes')
        self.assertFalse(os.path.exists(os.path.join(self.state_dir, 'vocanova_progress.json')))


class TestPersistedProgress(ServerTestCase):
    persist = '1'

    def test_progress_survives_restart(self):
        self.score('tomatoes')
        self.client.post('/api/practice/next', json={})

        self.client = self.start_client()

        stats = self.client.get('/api/stats').json()
        self.assertEqual(stats['points'], 15)
        self.assertEqual(self.client.get('/api/practice/current').json()['text'], 'Apple')


class TestTranscribeEndpoint(ServerTestCase):

    def transcribe(self, audio_b64: str = AUDIO_B64):
        return self.client.post('/api/practice/transcribe', json={'audio_base64': audio_b64})

    def test_no_recognizer(self):
        self.assertIsNone(app_module.recognizer)
        self.assertEqual(self.transcribe().status_code, 503)

    def test_transcribe_and_score(self):
        app_module.recognizer = StubRecognizer('tomatoes')
        result = self.transcribe().json()
        self.assertEqual(result['recognized_text'], 'tomatoes')
        self.assertEqual(result['confidence'], 0.95)
        self.assertEqual(result['accuracy'], 100)

    def test_invalid_base64(self):
        app_module.recognizer = StubRecognizer('tomatoes')
        self.assertEqual(self.transcribe('not base64!!').status_code, 400)

    def test_no_speech(self):
        app_module.recognizer = StubRecognizer(error=NoSpeechError('silence'))
        self.assertEqual(self.transcribe().status_code, 422)
        self.assertEqual(self.client.get('/api/stats').json()['total_attempts'], 0)

    def test_recognizer_unavailable(self):
        app_module.recognizer = StubRecognizer(error=requests.ConnectionError('down'))
        self.assertEqual(self.transcribe().status_code, 502)


class TestQuizEndpoints(ServerTestCase):

    def test_quiz_lifecycle(self):
        self.assertFalse(self.client.get('/api/quiz').json()['completed'])

        answers = {'name': 'Sam', 'age': '7', 'improvement_goals': ['speaking_clearly']}
        self.assertTrue(self.client.post('/api/quiz', json={'answers': answers}).json()['success'])

        quiz = self.client.get('/api/quiz').json()
        self.assertTrue(quiz['completed'])
        self.assertEqual(quiz['answers'], answers)

        profile = self.client.get('/api/profile').json()
        self.assertTrue(profile['quiz_completed'])
        self.assertEqual(profile['profile']['name'], 'Sam')
        self.assertEqual(profile['word_difficulty'], 'easy')
        self.assertEqual(profile['rewards']['type'], 'pronunciation_focus')

        self.client.delete('/api/quiz')
        self.assertFalse(self.client.get('/api/quiz').json()['completed'])

    def test_default_profile(self):
        profile = self.client.get('/api/profile', params={'user_id': 'new'}).json()
        self.assertFalse(profile['quiz_completed'])
        self.assertEqual(profile['word_difficulty'], 'medium')
        self.assertEqual(profile['rewards']['type'], 'confidence_building')
        self.assertEqual(len(profile['tips']), 1)

    def test_empty_answers_give_consistent_profile(self):
        self.client.post('/api/quiz', json={'answers': {}, 'user_id': 'quiet'})
        profile = self.client.get('/api/profile', params={'user_id': 'quiet'}).json()
        self.assertTrue(profile['quiz_completed'])
        self.assertEqual(profile['profile']['name'], 'Friend')
        self.assertEqual(profile['profile']['age'], 10)
        self.assertEqual(profile['profile']['challenges'], [])


class TestUserIdValidation(ServerTestCase):

    def test_quiz_cannot_write_outside_state_dir(self):
        response = self.client.post('/api/quiz', json={'answers': {'name': 'x'}, 'user_id': '/../../escaped'})
        self.assertEqual(response.status_code, 400)
        response = self.client.post('/api/quiz', json={'answers': {'name': 'x'}, 'user_id': '../escaped'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(sorted(os.listdir(self.tmp.name)), [])

    def test_quiz_cannot_delete_outside_state_dir(self):
        outside = os.path.join(self.tmp.name, 'vocanova_quiz_keep.json')
        with open(outside, 'w') as f:
            f.write('{}')
        response = self.client.delete('/api/quiz', params={'user_id': '../vocanova_quiz_keep'})
        self.assertEqual(response.status_code, 400)
        self.assertTrue(os.path.exists(outside))

    def test_practice_routes_reject_unsafe_ids(self):
        self.assertEqual(self.client.get('/api/stats', params={'user_id': '../x'}).status_code, 400)
        self.assertEqual(self.score('tomatoes', user_id='a/b').status_code, 400)
        self.assertEqual(self.client.get('/api/profile', params={'user_id': '..'}).status_code, 400)
        response = self.client.post('/api/practice/transcribe',
                                    json={'audio_base64': AUDIO_B64, 'user_id': '../x'})
        self.assertEqual(response.status_code, 400)


class TestFileCatalog(ServerTestCase):
    catalog_data = {
        'food': {
            'name': 'Meals',
            'words': [
                {'text': 'Soup', 'phonetic': 'SOOP', 'difficulty': 'easy',
                 'tips': {'excellent': 'a', 'good': 'b', 'fair': 'c', 'poor': 'd'}},
                {'text': 'Stew', 'phonetic': 'STOO', 'difficulty': 'hard',
                 'tips': {'excellent': 'a', 'good': 'b', 'fair': 'c', 'poor': 'd'}}
            ]
        }
    }

    def test_categories_come_from_file(self):
        categories = self.client.get('/api/categories').json()['categories']
        self.assertEqual(categories, [{'key': 'food', 'name': 'Meals', 'word_count': 2}])

    def test_category_words_come_from_file(self):
        response = self.client.get('/api/categories/food/words', params={'difficulty': 'hard'})
        words = response.json()['words']
        self.assertEqual([(w['word_index'], w['text']) for w in words], [(1, 'Stew')])
        self.assertEqual(self.client.get('/api/categories/animals/words').status_code, 404)

    def test_practice_uses_file_catalog(self):
        word = self.client.get('/api/practice/current').json()
        self.assertEqual(word['text'], 'Soup')
        self.assertEqual(word['category_name'], 'Meals')
        self.assertEqual(self.score('soup').json()['accuracy'], 100)


if __name__ == '__main__':
    unittest.main()
