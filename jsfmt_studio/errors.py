from __future__ import annotations


class StudioError(Exception):
    """Base for failures that are shown to the user and recovered locally."""

    kind = "error"

    def __init__(self, user_message: str):
        super().__init__(user_message)
        self.user_message = user_message


class InputTooLargeError(StudioError):
    kind = "input-too-large"


class FileTooLargeError(StudioError):
    kind = "file-too-large"


class UnsupportedFileTypeError(StudioError):
    kind = "unsupported-file-type"


class FormatterError(StudioError):
    """The formatting engine rejected the source.

    Only the message text is meaningful; it is pattern-matched by
    `error_parsing.interpret`.
    """

    kind = "formatter-failure"


class ClipboardUnavailableError(StudioError):
    kind = "clipboard-unavailable"


class ClipboardError(StudioError):
    kind = "clipboard-failure"


class CopyFallbackError(StudioError):
    kind = "copy-fallback-failure"


class NoOutputError(StudioError):
    kind = "no-output-to-act-on"
