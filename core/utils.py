"""Utility functions for finyap application."""

from .config import PUNCTUATION


def clean_word(word: str) -> str:
    """Lowercase a word and strip surrounding punctuation."""
    return word.lower().strip(PUNCTUATION)


def is_guessable(word: str) -> bool:
    """A word is guessable unless it is pure punctuation."""
    return clean_word(word) != ''


def split_words(text: str) -> list[str]:
    """Split a sentence into whitespace separated tokens."""
    return text.split()


def build_vocabulary(sentences) -> list[str]:
    """Collect the distinct normalized words of the given sentences.

    Used as the candidate list for word selection, so it covers every
    sentence in scope rather than only the ones sampled into a session.
    """
    words = set()
    for sentence in sentences:
        for word in sentence.normalized_words:
            if word:
                words.add(word)
    return sorted(words)
