"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class Storage(ABC):
    """Abstract base class for play history storage."""

    @abstractmethod
    def sync_sentences(self, sentences: list) -> list:
        """Register sentences, keyed on their Finnish text.
        Returns the same sentences carrying their stable ids."""
        pass

    @abstractmethod
    def log_play(self, sentence_id: int, was_correct: bool) -> None:
        """Record a single guess."""
        pass

    @abstractmethod
    def log_sentence_result(self, result) -> None:
        """Record a completed sentence (a SentenceResult)."""
        pass

    @abstractmethod
    def get_scenario_stats(self) -> list:
        """Get per-scenario play counts. Returns a list of ScenarioStat."""
        pass
