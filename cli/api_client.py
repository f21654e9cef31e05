"""REST API client for vocanova server."""

import requests


class VocanovaAPIClient:
    """Client for communicating with the vocanova REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict) -> dict:
        """Make a POST request."""
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_categories(self) -> list[dict]:
        """List word categories."""
        return self._get("/api/categories")['categories']

    def get_current_word(self, category: str = None) -> dict:
        """Get the word being practiced, optionally switching category."""
        params = {'category': category} if category else {}
        return self._get("/api/practice/current", params)

    def next_word(self) -> dict:
        """Move on to the next word."""
        return self._post("/api/practice/next", {})

    def submit_text(self, recognized_text: str, confidence: float = 1.0) -> dict:
        """Submit recognized text for scoring."""
        return self._post("/api/practice/score", {
            'recognized_text': recognized_text,
            'confidence': confidence
        })

    def get_stats(self) -> dict:
        """Get points and streak."""
        return self._get("/api/stats")
