"""Tests for the Google Speech-to-Text recognizer."""

import base64
import unittest
from unittest.mock import MagicMock

import requests

from core.interfaces import NoSpeechError
from server.google_speech import GoogleSpeechRecognizer, RECOGNIZE_URL

API_KEY = 'A' * 39
AUDIO = b'\x00\x01' * 1000


def make_response(payload: dict = None, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.ok = status_code < 400
    response.status_code = status_code
    response.text = 'error body'
    response.json.return_value = payload or {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f'{status_code} Client Error')
    return response


class TestGoogleSpeechRecognizer(unittest.TestCase):
    """Tests for GoogleSpeechRecognizer."""

    def setUp(self):
        self.session = MagicMock()
        self.recognizer = GoogleSpeechRecognizer(API_KEY, session=self.session)

    def test_short_key_rejected(self):
        with self.assertRaises(ValueError):
            GoogleSpeechRecognizer('short')
        with self.assertRaises(ValueError):
            GoogleSpeechRecognizer('')

    def test_tiny_audio_is_no_speech(self):
        with self.assertRaises(NoSpeechError):
            self.recognizer.transcribe(b'\x00' * 999)
        self.session.post.assert_not_called()
        self.assertEqual(self.recognizer.get_stats()['no_speech'], 1)

    def test_transcribe(self):
        self.session.post.return_value = make_response({
            'results': [{'alternatives': [{'transcript': 'banana', 'confidence': 0.93}]}]
        })

        result = self.recognizer.transcribe(AUDIO)

        self.assertEqual(result.text, 'banana')
        self.assertEqual(result.confidence, 0.93)
        stats = self.recognizer.get_stats()
        self.assertEqual(stats['calls'], 1)
        self.assertEqual(stats['no_speech'], 0)

    def test_request_shape(self):
        self.session.post.return_value = make_response({
            'results': [{'alternatives': [{'transcript': 'tiger'}]}]
        })

        self.recognizer.transcribe(AUDIO)

        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], RECOGNIZE_URL)
        self.assertEqual(kwargs['params'], {'key': API_KEY})
        config = kwargs['json']['config']
        self.assertEqual(config['languageCode'], 'en-US')
        self.assertEqual(config['model'], 'phone_call')
        self.assertFalse(config['enableAutomaticPunctuation'])
        self.assertEqual(base64.b64decode(kwargs['json']['audio']['content']), AUDIO)

    def test_missing_confidence_defaults(self):
        self.session.post.return_value = make_response({
            'results': [{'alternatives': [{'transcript': 'tiger'}]}]
        })
        self.assertEqual(self.recognizer.transcribe(AUDIO).confidence, 0.8)

    def test_no_results_is_no_speech(self):
        self.session.post.return_value = make_response({})
        with self.assertRaises(NoSpeechError):
            self.recognizer.transcribe(AUDIO)
        self.assertEqual(self.recognizer.get_stats()['no_speech'], 1)

    def test_blank_transcript_is_no_speech(self):
        self.session.post.return_value = make_response({
            'results': [{'alternatives': [{'transcript': '   '}]}]
        })
        with self.assertRaises(NoSpeechError):
            self.recognizer.transcribe(AUDIO)

    def test_missing_alternatives_is_no_speech(self):
        self.session.post.return_value = make_response({'results': [{}]})
        with self.assertRaises(NoSpeechError):
            self.recognizer.transcribe(AUDIO)

    def test_http_error_propagates(self):
        self.session.post.return_value = make_response(status_code=403)
        with self.assertLogs('server.google_speech', level='ERROR'):
            with self.assertRaises(requests.HTTPError):
                self.recognizer.transcribe(AUDIO)

    def test_stats_average(self):
        self.assertEqual(self.recognizer.get_stats()['avg_ms'], 0)


if __name__ == '__main__':
    unittest.main()
