"""File-based storage implementation."""

import json
import logging
import os
from datetime import datetime

from core.interfaces import Storage
from core.models import ScenarioStat

logger = logging.getLogger(__name__)


class FileStorage(Storage):
    """File-based storage implementation."""

    def __init__(self, state_dir: str = None):
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.state_dir = state_dir or project_root

    def _path(self, name: str) -> str:
        return os.path.join(self.state_dir, f'finyap_{name}.json')

    def _load(self, name: str, default):
        path = self._path(name)
        if os.path.exists(path):
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"Error reading {path}: {e}")
                return default
        return default

    def _save(self, name: str, data) -> None:
        with open(self._path(name), 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def sync_sentences(self, sentences: list) -> list:
        known = self._load('sentences', {})
        next_id = max((entry['id'] for entry in known.values()), default=0) + 1
        for sentence in sentences:
            if sentence.finnish not in known:
                known[sentence.finnish] = {'id': next_id, 'scenario': sentence.scenario}
                next_id += 1
        self._save('sentences', known)
        return [s.with_id(known[s.finnish]['id']) for s in sentences]

    def log_play(self, sentence_id: int, was_correct: bool) -> None:
        try:
            plays = self._load('plays', [])
            plays.append({
                'sentence_id': sentence_id,
                'was_correct': was_correct,
                'timestamp': datetime.now().isoformat()
            })
            self._save('plays', plays)
        except OSError as e:
            logger.error(f"Error logging play: {e}")
            raise

    def log_sentence_result(self, result) -> None:
        try:
            results = self._load('sentence_results', [])
            entry = result.to_dict()
            entry['completed_at'] = datetime.now().isoformat()
            results.append(entry)
            self._save('sentence_results', results)
        except OSError as e:
            logger.error(f"Error logging sentence result: {e}")
            raise

    def get_sentence_results(self) -> list[dict]:
        """All stored sentence results, oldest first."""
        return self._load('sentence_results', [])

    def get_scenario_stats(self) -> list:
        known = self._load('sentences', {})
        scenario_by_id = {entry['id']: entry['scenario'] for entry in known.values()}
        stats = {}
        for entry in known.values():
            stat = stats.setdefault(entry['scenario'], ScenarioStat(entry['scenario']))
            stat.sentence_count += 1
        for result in self.get_sentence_results():
            scenario = scenario_by_id.get(result['sentence_id'])
            if scenario is None:
                continue
            stats[scenario].total_plays += 1
            if result['was_successful']:
                stats[scenario].correct_plays += 1
        return [stats[name] for name in sorted(stats)]
