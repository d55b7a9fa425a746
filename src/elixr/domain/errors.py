from typing import Iterable, Optional


class ValidationError(ValueError):
    """
    Invalid input to the delivery engine.
    `details` holds every individual problem, `str(exc)` joins them.
    """

    def __init__(self, message: str, details: Optional[Iterable[str]] = None):
        self.message = message
        self.details = list(details) if details else [message]
        super().__init__(message)
