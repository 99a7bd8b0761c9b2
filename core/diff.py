"""Character level feedback for guesses."""

from .utils import clean_word

MATCH = 'match'
MISMATCH = 'mismatch'


def diff_strings(user_input: str, target: str) -> tuple[list, list]:
    """Compare input and target position by position, ignoring case.

    Returns two lists of (char, status) pairs. Positions past the end of the
    shorter string only produce a mismatch on the longer side. There is no
    edit-distance alignment, so one missing letter shifts everything after it.
    """
    input_segments = []
    target_segments = []
    for i in range(max(len(user_input), len(target))):
        has_input = i < len(user_input)
        has_target = i < len(target)
        if has_input and has_target:
            a, b = user_input[i], target[i]
            status = MATCH if a.lower() == b.lower() else MISMATCH
            input_segments.append((a, status))
            target_segments.append((b, status))
        elif has_input:
            input_segments.append((user_input[i], MISMATCH))
        else:
            target_segments.append((target[i], MISMATCH))
    return input_segments, target_segments


def live_feedback(user_input: str, target: str) -> list:
    """Annotate partially typed input against a normalized target word."""
    typed = clean_word(user_input)
    feedback = []
    for i, char in enumerate(typed):
        if i < len(target) and char == target[i]:
            feedback.append((char, MATCH))
        else:
            feedback.append((char, MISMATCH))
    return feedback


def render_plain(segments: list, marker: str = '^') -> tuple[str, str]:
    """Render annotated segments as a text line plus a marker line underneath."""
    text = ''.join(char for char, _ in segments)
    marks = ''.join(marker if status == MISMATCH else ' ' for _, status in segments)
    return text, marks.rstrip()
