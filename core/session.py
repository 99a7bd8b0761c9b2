"""Session engine: composing queues, playing rounds, scheduling recovery passes."""

import logging
import random
import time

from .cipher import cipher_segments, clitic_segments
from .config import DEFAULT_SENTENCES_PER_SCENARIO
from .diff import diff_strings, live_feedback
from .errors import ConfigurationError, ContentError
from .models import Sentence, SessionQueue, ScenarioStat, WordAttempt, aggregate
from .utils import clean_word

logger = logging.getLogger(__name__)

# Session states
PLAYING = 'playing'
ROUND_OVER = 'round_over'
DONE = 'done'
CANCELLED = 'cancelled'


def validate_quota(value) -> int:
    """Parse the sentences-per-scenario setting. Blank means the default."""
    if value is None or str(value).strip() == '':
        return DEFAULT_SENTENCES_PER_SCENARIO
    try:
        quota = int(str(value).strip())
    except ValueError:
        raise ConfigurationError(f"Invalid input: '{value}'. Please enter a positive number")
    if quota <= 0:
        raise ConfigurationError(f"Invalid input: '{value}'. Please enter a positive number")
    return quota


def compose_session(selected_scenarios: list[str], per_scenario: int,
                    all_sentences: list[Sentence], rng: random.Random = None) -> SessionQueue:
    """Build a queue with up to per_scenario random sentences from each scenario.

    Scenarios are played as blocks in the order they were selected.
    """
    if per_scenario <= 0:
        raise ConfigurationError(f"Sentences per scenario must be positive, got {per_scenario}")
    rng = rng or random
    by_scenario = {}
    for sentence in all_sentences:
        by_scenario.setdefault(sentence.scenario, []).append(sentence)

    queue = []
    for name in selected_scenarios:
        candidates = list(by_scenario.get(name, []))
        if not candidates:
            continue
        rng.shuffle(candidates)
        queue.extend(candidates[:min(per_scenario, len(candidates))])
    return SessionQueue(queue)


def next_pass(failed_ids: set, all_sentences: list[Sentence],
              rng: random.Random = None) -> SessionQueue | None:
    """Queue the failed sentences again, or None when nothing was failed."""
    if not failed_ids:
        return None
    rng = rng or random
    # Sentences shared between scenarios share an id; the first copy stands for it
    by_id = {}
    for sentence in all_sentences:
        by_id.setdefault(sentence.id, sentence)
    sentences = [by_id[i] for i in failed_ids if i in by_id]
    if not sentences:
        logger.warning(f"Failed sentence ids not found in content: {sorted(failed_ids)}")
        return None
    rng.shuffle(sentences)
    return SessionQueue(sentences, recovery=True)


def sort_stats(stats: list[ScenarioStat], rng: random.Random = None) -> list[ScenarioStat]:
    """Most played scenarios first; ties are shuffled so the list varies between runs."""
    rng = rng or random
    groups = {}
    for stat in stats:
        groups.setdefault(stat.total_plays, []).append(stat)
    ordered = []
    for plays in sorted(groups, reverse=True):
        group = groups[plays]
        rng.shuffle(group)
        ordered.extend(group)
    return ordered


def filter_stats(stats: list[ScenarioStat], text: str) -> list[ScenarioStat]:
    text = (text or '').lower()
    return [s for s in stats if text in s.name.lower()]


def ordered_selection(names: list[str], selected) -> list[str]:
    """Selected scenario names, in the order they are listed."""
    return [name for name in names if name in selected]


class GameSession:
    """Plays a queue of sentences word by word.

    Inputs are submit_guess, acknowledge and cancel. Each either moves the
    session to a valid next state or does nothing; exceptions from the
    recorder are logged and never interrupt play. Results are only recorded
    for the first pass, recovery passes are practice.
    """

    def __init__(self, queue: SessionQueue, all_sentences: list[Sentence],
                 recorder=None, clock=time.monotonic, rng: random.Random = None):
        # Failures are tracked by id
        missing = [s for s in list(queue.sentences) + list(all_sentences) if s.id is None]
        if missing:
            raise ContentError(f"Sentence has no id: {missing[0].finnish!r}")
        self.queue = queue
        self.all_sentences = list(all_sentences)
        self.recorder = recorder
        self.clock = clock
        self.rng = rng
        self.failed_ids = set()
        self.attempts = []
        self.round_success = None
        self.last_input = None
        self.last_result = None
        self.passes = 1
        self.word_started = None
        if queue.is_empty():
            self.state = DONE
        else:
            self.state = PLAYING
            self._start_sentence()

    @classmethod
    def start(cls, selected_scenarios: list[str], per_scenario: int,
              all_sentences: list[Sentence], recorder=None, **kwargs) -> 'GameSession':
        """Compose a queue and start playing it."""
        if not selected_scenarios:
            raise ConfigurationError("No scenarios selected")
        queue = compose_session(selected_scenarios, per_scenario, all_sentences, kwargs.get('rng'))
        if queue.is_empty():
            raise ConfigurationError("No sentences available for the selected scenarios")
        return cls(queue, all_sentences, recorder, **kwargs)

    @property
    def recovery(self) -> bool:
        return self.queue.recovery

    @property
    def sentence(self) -> Sentence | None:
        return self.queue.current

    @property
    def is_finished(self) -> bool:
        return self.state in (DONE, CANCELLED)

    def _start_sentence(self) -> None:
        self.attempts = []
        self.round_success = None
        self.last_input = None
        self._skip_unguessable()
        self.word_started = self.clock()

    def _skip_unguessable(self) -> None:
        """Reveal punctuation-only tokens without asking for them."""
        sentence = self.queue.current
        while (self.queue.word_idx < len(sentence.words)
               and not sentence.normalized_words[self.queue.word_idx]):
            self.queue.reveal_current_word()
            self.queue.next_word()

    def _record(self, method: str, *args) -> None:
        if self.recorder is None:
            return
        try:
            getattr(self.recorder, method)(*args)
        except Exception as e:
            logger.error(f"Recording {method} failed: {e}")

    def submit_guess(self, raw: str) -> WordAttempt | None:
        """Check a guess for the current word. Returns the attempt, or None if ignored."""
        if self.state != PLAYING:
            return None
        guess = clean_word(raw or '')
        if not guess:
            return None

        sentence = self.queue.current
        word_idx = self.queue.word_idx
        is_correct = guess == sentence.normalized_words[word_idx]
        attempt = WordAttempt(word_idx, raw, is_correct, self.clock() - self.word_started)
        self.attempts.append(attempt)
        self.last_input = raw
        if not self.recovery:
            self._record('log_play', sentence.id, is_correct)

        if not is_correct:
            self.failed_ids.add(sentence.id)
            self._finish_round(False)
            return attempt

        self.queue.reveal_current_word()
        self.queue.next_word()
        self._skip_unguessable()
        if self.queue.word_idx >= len(sentence.words):
            self._finish_round(True)
        else:
            self.word_started = self.clock()
        return attempt

    def _finish_round(self, success: bool) -> None:
        self.state = ROUND_OVER
        self.round_success = success
        self.last_result = None
        if self.recovery:
            return
        result = aggregate(self.queue.current.id, success, self.attempts)
        self.last_result = result
        self._record('log_sentence_result', result)

    def acknowledge(self) -> str:
        """Leave the round-over screen: next sentence, next pass, or done."""
        if self.state != ROUND_OVER:
            return self.state
        if self.queue.next_sentence():
            self.state = PLAYING
            self._start_sentence()
            return self.state

        queue = next_pass(self.failed_ids, self.all_sentences, self.rng)
        if queue is None:
            logger.info(f"Session complete after {self.passes} pass(es)")
            self.state = DONE
            return self.state

        logger.info(f"Starting recovery pass with {len(queue)} sentence(s)")
        self.queue = queue
        self.failed_ids = set()
        self.passes += 1
        self.state = PLAYING
        self._start_sentence()
        return self.state

    def cancel(self) -> str:
        """Abandon the session. In-flight attempts are dropped unrecorded."""
        if self.state in (PLAYING, ROUND_OVER):
            self.attempts = []
            self.failed_ids = set()
            self.state = CANCELLED
        return self.state

    def feedback(self, typed: str) -> list:
        """Live per-character feedback for what the learner has typed so far."""
        if self.state != PLAYING:
            return []
        return live_feedback(typed, self.queue.current.normalized_words[self.queue.word_idx])

    def failure_diff(self) -> tuple[list, list] | None:
        """Diff of the failing guess against the word it should have been."""
        if self.state != ROUND_OVER or self.round_success:
            return None
        target = self.queue.current.words[self.queue.word_idx]
        return diff_strings(self.last_input, target)

    def _word_views(self) -> list[dict]:
        sentence = self.queue.current
        views = []
        for i, word in enumerate(sentence.words):
            revealed = i in self.queue.revealed
            current = self.state == PLAYING and i == self.queue.word_idx
            if revealed or self.state == ROUND_OVER:
                segments = clitic_segments(word)
            else:
                segments = cipher_segments(word)
            views.append({
                'segments': [list(s) for s in segments],
                'revealed': revealed,
                'current': current
            })
        return views

    def _prompt(self) -> str:
        if self.queue.sentence_idx + 1 < len(self.queue):
            return 'next'
        return 'recovery' if self.failed_ids else 'finish'

    def view(self) -> dict:
        """Snapshot of what the learner should see right now."""
        data = {
            'state': self.state,
            'recovery': self.recovery,
            'pass': self.passes
        }
        if self.is_finished:
            return data

        sentence = self.queue.current
        data.update({
            'scenario': sentence.scenario,
            'position': self.queue.sentence_idx + 1,
            'total': len(self.queue),
            'remaining': self.queue.remaining,
            'english': sentence.english,
            'word_index': self.queue.word_idx,
            'words': self._word_views()
        })
        if self.state == ROUND_OVER:
            data['success'] = self.round_success
            data['finnish'] = sentence.finnish
            data['prompt'] = self._prompt()
            diff = self.failure_diff()
            if diff:
                data['diff'] = {
                    'input': [list(s) for s in diff[0]],
                    'target': [list(s) for s in diff[1]]
                }
        return data
