"""File-based storage implementation."""

import json
import os

from core.interfaces import Storage
from core.utils import validate_user_id


class FileStorage(Storage):
    """File-based storage implementation."""

    def __init__(self, config_file: str = None, state_dir: str = None):
        self.config_file = config_file or os.path.expanduser('~/.config/vocanova/config.json')
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.state_dir = state_dir or project_root

    def _get_file(self, kind: str, user_id: str) -> str:
        """Get the state file path of one kind for a user. Raises ValueError on unsafe ids."""
        validate_user_id(user_id)
        if user_id == "default":
            return os.path.join(self.state_dir, f'vocanova_{kind}.json')
        return os.path.join(self.state_dir, f'vocanova_{kind}_{user_id}.json')

    def _read_json(self, path: str) -> dict | None:
        if os.path.exists(path):
            try:
                with open(path, 'r') as f:
                    return json.load(f)
            except Exception:
                return None
        return None

    def _write_json(self, path: str, data: dict) -> None:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w') as f:
            json.dump(data, f, indent=2)

    def load_config(self) -> dict:
        if not os.path.exists(self.config_file):
            raise FileNotFoundError(
                f"Config file not found at {self.config_file}\n"
                f'Please create it with: {{"google_stt_api_key": "YOUR_API_KEY_HERE"}}'
            )
        with open(self.config_file, 'r') as f:
            return json.load(f)

    def load_progress(self, user_id: str = "default") -> dict | None:
        return self._read_json(self._get_file('progress', user_id))

    def save_progress(self, state: dict, user_id: str = "default") -> None:
        self._write_json(self._get_file('progress', user_id), state)

    def save_quiz_results(self, results: dict, user_id: str = "default") -> None:
        self._write_json(self._get_file('quiz', user_id), {
            'completed': True,
            'results': results
        })

    def load_quiz_results(self, user_id: str = "default") -> dict | None:
        data = self._read_json(self._get_file('quiz', user_id))
        if data:
            return data.get('results')
        return None

    def is_quiz_completed(self, user_id: str = "default") -> bool:
        data = self._read_json(self._get_file('quiz', user_id))
        return bool(data and data.get('completed'))

    def clear_quiz_results(self, user_id: str = "default") -> None:
        quiz_file = self._get_file('quiz', user_id)
        if os.path.exists(quiz_file):
            os.remove(quiz_file)
