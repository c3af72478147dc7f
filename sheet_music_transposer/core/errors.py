"""
Exceptions raised by the pitch, parsing and transposition code.

All of them are recoverable: callers are expected to catch them and
present the message to the user.
"""


class ScoreError(Exception):
    """Base class for sheet_music_transposer errors."""


class InvalidSpelling(ScoreError, ValueError):
    """A pitch-class or pitch text could not be parsed (e.g. "H#", "Cx4")."""

    def __init__(self, text: str, reason: str = ""):
        self.text = text
        message = f"Invalid pitch spelling: {text!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MalformedDocument(ScoreError):
    """The MusicXML text is not well-formed or has no score-partwise root."""


class InvalidKey(ScoreError, ValueError):
    """A key name could not be resolved to a tonic pitch."""

    def __init__(self, key_name: str):
        self.key_name = key_name
        super().__init__(f"Invalid key name: {key_name!r}")
