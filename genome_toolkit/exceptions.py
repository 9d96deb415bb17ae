from typing import Optional


class ToolkitError(Exception):
    """Base class for errors raised by the parsing and analysis routines."""


class FormatError(ToolkitError):
    """Raised when an uploaded file does not match its expected format."""

    def __init__(self, message: str, file_name: Optional[str] = None, line: Optional[int] = None):
        self.file_name = file_name
        self.line = line
        self.reason = message
        super().__init__(self._format_message(message, file_name, line))

    @staticmethod
    def _format_message(message: str, file_name: Optional[str], line: Optional[int]) -> str:
        if file_name and line is not None:
            return f"{file_name} line {line}: {message}"
        if file_name:
            return f"{file_name}: {message}"
        if line is not None:
            return f"Line {line}: {message}"
        return message


class ValidationError(ToolkitError):
    """Raised when a parameter is invalid for an otherwise valid input."""
