"""Exceptions raised while parsing PO text."""

from __future__ import annotations


class ParseError(ValueError):
    """Structural violation in PO input; parsing of that input is aborted."""

    def __init__(self, message: str, line_number: int) -> None:
        super().__init__(message)
        self.line_number = line_number


class UnrecognizedPropertyError(ParseError):
    def __init__(self, key: str, line_number: int) -> None:
        super().__init__(f"Could not parse {key} at line {line_number}", line_number)
        self.key = key


class DanglingContinuationError(ParseError):
    def __init__(self, line_number: int) -> None:
        super().__init__(
            f"Continuation line without an active property at line {line_number}",
            line_number,
        )
