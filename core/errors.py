"""Exception types for finyap application."""


class FinyapError(Exception):
    """Base class for finyap errors."""


class ConfigurationError(FinyapError):
    """Invalid session configuration (empty selection, bad quota, nothing to play)."""


class ContentError(FinyapError):
    """A sentence that cannot be played, e.g. one without any tokens."""
