"""Word obscuring: clitic segmentation and the vowel/consonant cipher."""

from .config import (
    CLITICS,
    LOW_VOWELS, MID_VOWELS, HIGH_VOWELS, CONSONANTS,
    LOW_VOWEL_MARK, MID_VOWEL_MARK, HIGH_VOWEL_MARK, CONSONANT_MARK
)

STEM = 'stem'
CLITIC = 'clitic'


def segment_clitics(word: str, clitics: list[str] = CLITICS) -> tuple[str, list[str]]:
    """Split trailing clitics off a word.

    Returns (stem, clitics) where the clitics keep their original casing and
    are listed in the order they appear in the word. Stacked clitics are
    peeled one per pass until a pass finds nothing. The stem may end up empty.
    """
    found = []
    stem = word
    while True:
        match = None
        for clitic in clitics:
            # Compare the original tail so lowercasing cannot shift the cut
            if len(stem) >= len(clitic) and stem[len(stem) - len(clitic):].lower() == clitic:
                match = clitic
                break
        if match is None:
            break
        cut = len(stem) - len(match)
        found.insert(0, stem[cut:])
        stem = stem[:cut]
    return stem, found


def _cipher_char(char: str) -> str:
    lowered = char.lower()
    if lowered in LOW_VOWELS:
        return LOW_VOWEL_MARK
    if lowered in MID_VOWELS:
        return MID_VOWEL_MARK
    if lowered in HIGH_VOWELS:
        return HIGH_VOWEL_MARK
    if lowered in CONSONANTS:
        return CONSONANT_MARK
    return char


def cipher_word(text: str) -> str:
    """Replace every letter by its class marker, keeping the word's shape."""
    return ''.join(_cipher_char(c) for c in text)


def clitic_segments(word: str) -> list[tuple[str, str]]:
    """Annotate a word as a stem segment followed by its clitic segments."""
    stem, clitics = segment_clitics(word)
    segments = [(stem, STEM)]
    segments.extend((clitic, CLITIC) for clitic in clitics)
    return segments


def cipher_segments(word: str) -> list[tuple[str, str]]:
    """Clitic-aware cipher: stem and each clitic are ciphered separately."""
    return [(cipher_word(text), kind) for text, kind in clitic_segments(word)]
