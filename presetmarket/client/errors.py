from typing import Optional


class ActionError(Exception):
    """A cart, wishlist or item action failed; ``message`` is shown to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AudioError(Exception):
    """Raised by audio backends when a preview cannot be loaded or played."""
