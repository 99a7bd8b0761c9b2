"""REST API client for finyap server."""

import requests


class FinyapAPIClient:
    """Client for communicating with the finyap REST API."""

    def __init__(self, base_url: str = "http://localhost:8000"):
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        response = self.session.get(f"{self.base_url}{endpoint}", params=params or {})
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        response = self.session.post(f"{self.base_url}{endpoint}", json=data or {})
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        return self._get("/")

    def get_scenarios(self, name_filter: str = "") -> list:
        """Get scenario statistics, most played first."""
        return self._get("/api/scenarios", {'filter': name_filter})

    def start_session(self, scenarios: list[str], per_scenario: int) -> dict:
        """Start a session over the selected scenarios."""
        return self._post("/api/sessions", {
            'scenarios': scenarios,
            'per_scenario': per_scenario
        })

    def submit_guess(self, session_id: str, word: str) -> dict:
        return self._post(f"/api/sessions/{session_id}/guess", {'word': word})

    def acknowledge(self, session_id: str) -> dict:
        return self._post(f"/api/sessions/{session_id}/ack")

    def cancel(self, session_id: str) -> dict:
        return self._post(f"/api/sessions/{session_id}/cancel")
