"""Tests for the finyap HTTP API."""

import tempfile
import unittest

from fastapi.testclient import TestClient

from core.models import Sentence
from server import app as app_module
from server.file_storage import FileStorage


class TestAPI(unittest.TestCase):
    """Tests for session endpoints backed by file storage."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.storage = FileStorage(state_dir=self.tmp.name)
        sentences = [
            Sentence.from_text("kahvila.tsv", "Minä menen.", "I go."),
            Sentence.from_text("kauppa.tsv", "Ostan leipää.", "I buy bread.")
        ]
        app_module.init_state(self.storage, sentences)
        self.client = TestClient(app_module.create_app())

    def tearDown(self):
        app_module.init_state(None, [])
        self.tmp.cleanup()

    def start(self, scenarios=("kahvila.tsv",)) -> dict:
        response = self.client.post("/api/sessions", json={'scenarios': list(scenarios), 'per_scenario': 1})
        self.assertEqual(response.status_code, 200)
        return response.json()

    def test_health(self):
        response = self.client.get("/")
        self.assertEqual(response.json()['sentences'], 2)

    def test_scenarios(self):
        names = [s['name'] for s in self.client.get("/api/scenarios").json()]
        self.assertEqual(sorted(names), ["kahvila.tsv", "kauppa.tsv"])
        filtered = self.client.get("/api/scenarios", params={'filter': 'KAUP'}).json()
        self.assertEqual([s['name'] for s in filtered], ["kauppa.tsv"])

    def test_vocabulary(self):
        self.assertEqual(self.client.get("/api/vocabulary").json()['words'],
                         ["leipää", "menen", "minä", "ostan"])
        scoped = self.client.get("/api/vocabulary", params={'scenario': 'kauppa.tsv'}).json()
        self.assertEqual(scoped['words'], ["leipää", "ostan"])

    def test_successful_session(self):
        view = self.start()
        session_id = view['session_id']
        self.assertEqual(view['state'], 'playing')
        self.assertEqual(view['words'][0]['segments'], [["xExÄ", "stem"]])

        view = self.client.post(f"/api/sessions/{session_id}/guess", json={'word': 'Minä'}).json()
        self.assertTrue(view['last_guess_correct'])
        self.assertEqual(view['word_index'], 1)

        view = self.client.post(f"/api/sessions/{session_id}/guess", json={'word': 'menen'}).json()
        self.assertEqual(view['state'], 'round_over')
        self.assertTrue(view['success'])
        self.assertEqual(view['prompt'], 'finish')

        view = self.client.post(f"/api/sessions/{session_id}/ack").json()
        self.assertEqual(view['state'], 'done')
        self.assertEqual(self.client.get(f"/api/sessions/{session_id}").status_code, 404)

        self.assertEqual(len(self.storage.get_sentence_results()), 1)
        self.assertEqual(len(self.storage._load('plays', [])), 2)
        stats = {s['name']: s for s in self.client.get("/api/scenarios").json()}
        self.assertEqual(stats["kahvila.tsv"]['total_plays'], 1)
        self.assertEqual(stats["kahvila.tsv"]['accuracy'], 100.0)

    def test_failed_session_enters_recovery(self):
        session_id = self.start()['session_id']
        view = self.client.post(f"/api/sessions/{session_id}/guess", json={'word': 'sinä'}).json()
        self.assertFalse(view['success'])
        self.assertEqual(view['diff']['input'][0], ["s", "mismatch"])
        self.assertEqual(view['prompt'], 'recovery')

        view = self.client.post(f"/api/sessions/{session_id}/ack").json()
        self.assertTrue(view['recovery'])
        self.assertEqual(view['pass_number'], 2)

        self.client.post(f"/api/sessions/{session_id}/guess", json={'word': 'minä'})
        self.client.post(f"/api/sessions/{session_id}/guess", json={'word': 'menen'})
        view = self.client.post(f"/api/sessions/{session_id}/ack").json()
        self.assertEqual(view['state'], 'done')
        self.assertEqual(len(self.storage.get_sentence_results()), 1)

    def test_feedback(self):
        session_id = self.start()['session_id']
        response = self.client.get(f"/api/sessions/{session_id}/feedback", params={'typed': 'Mu'})
        self.assertEqual(response.json()['feedback'], [["m", "match"], ["u", "mismatch"]])
        self.client.post(f"/api/sessions/{session_id}/guess", json={'word': 'minä'})
        response = self.client.get(f"/api/sessions/{session_id}/feedback", params={'typed': 'men'})
        self.assertEqual(len(response.json()['feedback']), 3)
        self.assertEqual(self.client.get("/api/sessions/nope/feedback").status_code, 404)

    def test_content_without_storage_gets_ids(self):
        sentences = [
            Sentence.from_text("a.tsv", "Minä menen.", "I go."),
            Sentence.from_text("b.tsv", "Sinä tulet.", "You come.")
        ]
        app_module.init_state(None, sentences)
        self.assertEqual([s.id for s in app_module.sentences], [1, 2])

        response = self.client.post("/api/sessions", json={'scenarios': ["a.tsv"], 'per_scenario': 1})
        session_id = response.json()['session_id']
        self.client.post(f"/api/sessions/{session_id}/guess", json={'word': 'sinä'})
        view = self.client.post(f"/api/sessions/{session_id}/ack").json()
        self.assertTrue(view['recovery'])
        self.assertEqual(view['total'], 1)
        self.assertEqual(view['scenario'], "a.tsv")

    def test_cancel(self):
        session_id = self.start()['session_id']
        self.client.post(f"/api/sessions/{session_id}/guess", json={'word': 'minä'})
        view = self.client.post(f"/api/sessions/{session_id}/cancel").json()
        self.assertEqual(view['state'], 'cancelled')
        self.assertEqual(self.storage.get_sentence_results(), [])
        self.assertEqual(self.client.post(f"/api/sessions/{session_id}/ack").status_code, 404)

    def test_configuration_errors(self):
        response = self.client.post("/api/sessions", json={'scenarios': [], 'per_scenario': 1})
        self.assertEqual(response.status_code, 400)
        response = self.client.post("/api/sessions", json={'scenarios': ["kahvila.tsv"], 'per_scenario': 0})
        self.assertEqual(response.status_code, 400)
        response = self.client.post("/api/sessions", json={'scenarios': ["missing.tsv"], 'per_scenario': 3})
        self.assertEqual(response.status_code, 400)

    def test_unknown_session(self):
        self.assertEqual(self.client.get("/api/sessions/nope").status_code, 404)
        response = self.client.post("/api/sessions/nope/guess", json={'word': 'minä'})
        self.assertEqual(response.status_code, 404)


if __name__ == '__main__':
    unittest.main()
