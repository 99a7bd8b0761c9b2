"""Loading scenario files into sentences."""

import logging
import os

from .config import SCENARIOS_DIR, SCENARIO_FILE_SUFFIX
from .errors import ContentError
from .models import Sentence

logger = logging.getLogger(__name__)


def parse_scenario(text: str, scenario: str) -> list[Sentence]:
    """Parse tab separated 'finnish<TAB>english' lines.

    Blank lines, lines without a tab and lines without any playable word
    are skipped.
    """
    sentences = []
    for line in text.splitlines():
        if not line.strip():
            continue
        parts = line.split('\t', 1)
        if len(parts) != 2:
            continue
        try:
            sentences.append(Sentence.from_text(scenario, parts[0], parts[1]))
        except ContentError:
            logger.warning(f"Skipping unplayable line in {scenario}: {line!r}")
    return sentences


def load_scenarios(directory: str = SCENARIOS_DIR) -> list[Sentence]:
    """Load every scenario file below a directory. The file name is the scenario."""
    sentences = []
    for root, _dirs, files in os.walk(directory):
        for filename in sorted(files):
            if not filename.endswith(SCENARIO_FILE_SUFFIX):
                continue
            path = os.path.join(root, filename)
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    text = f.read()
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Error reading file {path}: {e}")
                continue
            sentences.extend(parse_scenario(text, filename))
    return sentences


def assign_ids(sentences: list[Sentence]) -> list[Sentence]:
    """Number sentences sequentially, for play without a storage backend."""
    return [s.with_id(i) for i, s in enumerate(sentences, start=1)]
