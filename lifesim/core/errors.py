"""Exceptions raised for malformed content. Gameplay failures are results, not exceptions."""

from __future__ import annotations


class ContentError(ValueError):
    """A content record could not be interpreted."""

    def __init__(self, message: str, record: object = None) -> None:
        super().__init__(message)
        self.record = record
