"""Error types for the data layer."""

from typing import Optional


class FetchError(Exception):
    """A historical-price request failed.

    Covers transport failures, non-success HTTP statuses and response bodies
    that are not a JSON object. The underlying exception is kept on ``cause``
    so it can be logged; it is never shown to the user.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        base = super().__str__()
        if self.cause is None:
            return base
        return f"{base} ({type(self.cause).__name__}: {self.cause})"
