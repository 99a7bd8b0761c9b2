"""Domain models for finyap application."""

from .errors import ContentError
from .utils import clean_word, split_words


class Sentence:
    """A playable sentence with its tokens and their normalized forms."""

    def __init__(self, sentence_id: int | None, scenario: str, finnish: str, english: str,
                 words: list[str], normalized_words: list[str] = None):
        if normalized_words is None:
            normalized_words = [clean_word(w) for w in words]
        if not words or len(words) != len(normalized_words) or not any(normalized_words):
            raise ContentError(f"Sentence has no playable tokens: {finnish!r}")
        self.id = sentence_id
        self.scenario = scenario
        self.finnish = finnish
        self.english = english
        self.words = tuple(words)
        self.normalized_words = tuple(normalized_words)

    @classmethod
    def from_text(cls, scenario: str, finnish: str, english: str,
                  sentence_id: int | None = None) -> 'Sentence':
        """Tokenize a raw sentence line into a Sentence."""
        finnish = finnish.strip()
        return cls(sentence_id, scenario, finnish, english.strip(), split_words(finnish))

    def with_id(self, sentence_id: int) -> 'Sentence':
        return Sentence(sentence_id, self.scenario, self.finnish, self.english,
                        list(self.words), list(self.normalized_words))

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'scenario': self.scenario,
            'finnish': self.finnish,
            'english': self.english,
            'words': list(self.words),
            'normalized_words': list(self.normalized_words)
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Sentence':
        return cls(data.get('id'), data['scenario'], data['finnish'], data['english'],
                   data['words'], data.get('normalized_words'))

    def __eq__(self, other):
        if not isinstance(other, Sentence):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash((self.id, self.finnish))

    def __repr__(self):
        return f"Sentence(id={self.id!r}, scenario={self.scenario!r}, finnish={self.finnish!r})"


class WordAttempt:
    """One guess submitted for a word. Duration is in seconds."""

    def __init__(self, word_index: int, user_input: str, is_correct: bool, duration: float):
        self.word_index = word_index
        self.user_input = user_input
        self.is_correct = is_correct
        self.duration = duration

    @property
    def duration_ms(self) -> int:
        return int(self.duration * 1000)

    def to_dict(self) -> dict:
        return {
            'wordIndex': self.word_index,
            'userInput': self.user_input,
            'isCorrect': self.is_correct,
            'durationMs': self.duration_ms
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'WordAttempt':
        return cls(data['wordIndex'], data['userInput'], data['isCorrect'],
                   data.get('durationMs', 0) / 1000)


class SentenceResult:
    """Summary of one completed sentence, ready for storage."""

    def __init__(self, sentence_id: int, success: bool, total_duration: float,
                 attempts: list[WordAttempt]):
        self.sentence_id = sentence_id
        self.success = success
        self.total_duration = total_duration
        self.attempts = list(attempts)

    @property
    def total_duration_ms(self) -> int:
        return int(self.total_duration * 1000)

    def attempt_details(self) -> list[dict]:
        """Serialized attempt list as stored alongside the result."""
        return [a.to_dict() for a in self.attempts]

    def to_dict(self) -> dict:
        return {
            'sentence_id': self.sentence_id,
            'was_successful': self.success,
            'total_duration_ms': self.total_duration_ms,
            'attempt_details': self.attempt_details()
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SentenceResult':
        attempts = [WordAttempt.from_dict(a) for a in data.get('attempt_details', [])]
        return cls(data['sentence_id'], data['was_successful'],
                   data.get('total_duration_ms', 0) / 1000, attempts)


def aggregate(sentence_id: int, success: bool, attempts: list[WordAttempt]) -> SentenceResult:
    """Fold a sentence's word attempts into a single result."""
    total = sum(a.duration for a in attempts)
    return SentenceResult(sentence_id, success, total, attempts)


class ScenarioStat:
    """Play statistics for a scenario, used when choosing what to practice."""

    def __init__(self, name: str, total_plays: int = 0, correct_plays: int = 0,
                 sentence_count: int = 0):
        self.name = name
        self.total_plays = total_plays
        self.correct_plays = correct_plays
        self.sentence_count = sentence_count

    @property
    def accuracy(self) -> float:
        """Percentage of successful plays, 0 when never played."""
        if self.total_plays == 0:
            return 0.0
        return self.correct_plays / self.total_plays * 100

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'total_plays': self.total_plays,
            'correct_plays': self.correct_plays,
            'sentence_count': self.sentence_count,
            'accuracy': round(self.accuracy, 1)
        }


class SessionQueue:
    """Ordered sentences for one pass, with the play cursor.

    A queue is never reused across passes; the recovery scheduler builds a
    new one flagged as recovery.
    """

    def __init__(self, sentences: list[Sentence], recovery: bool = False):
        self.sentences = list(sentences)
        self.recovery = recovery
        self.sentence_idx = 0
        self.word_idx = 0
        self.revealed = set()

    def __len__(self):
        return len(self.sentences)

    def is_empty(self) -> bool:
        return not self.sentences

    @property
    def current(self) -> Sentence | None:
        if self.sentence_idx < len(self.sentences):
            return self.sentences[self.sentence_idx]
        return None

    @property
    def remaining(self) -> int:
        return len(self.sentences) - self.sentence_idx

    def reveal_current_word(self) -> None:
        self.revealed.add(self.word_idx)

    def next_word(self) -> None:
        self.word_idx += 1

    def next_sentence(self) -> bool:
        """Move to the next sentence. Returns False once the queue is exhausted."""
        self.sentence_idx += 1
        self.word_idx = 0
        self.revealed = set()
        return self.sentence_idx < len(self.sentences)

