from .models import (
    Sentence, WordAttempt, SentenceResult, ScenarioStat, SessionQueue, aggregate
)
from .interfaces import Storage
from .errors import FinyapError, ConfigurationError, ContentError
from .utils import clean_word, is_guessable, build_vocabulary
from .cipher import segment_clitics, cipher_word, cipher_segments, clitic_segments
from .diff import diff_strings, live_feedback
from .session import (
    GameSession, compose_session, next_pass, validate_quota,
    PLAYING, ROUND_OVER, DONE, CANCELLED
)
from .config import CLITICS, LANGUAGE, DEFAULT_SENTENCES_PER_SCENARIO

__all__ = [
    'Sentence', 'WordAttempt', 'SentenceResult', 'ScenarioStat', 'SessionQueue', 'aggregate',
    'Storage',
    'FinyapError', 'ConfigurationError', 'ContentError',
    'clean_word', 'is_guessable', 'build_vocabulary',
    'segment_clitics', 'cipher_word', 'cipher_segments', 'clitic_segments',
    'diff_strings', 'live_feedback',
    'GameSession', 'compose_session', 'next_pass', 'validate_quota',
    'PLAYING', 'ROUND_OVER', 'DONE', 'CANCELLED',
    'CLITICS', 'LANGUAGE', 'DEFAULT_SENTENCES_PER_SCENARIO'
]
