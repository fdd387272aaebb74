"""dabbrev exception hierarchy.

All dabbrev exceptions inherit from DabbrevError and support cause chaining.
"""


class DabbrevError(Exception):
    """Base exception for all dabbrev errors.

    Wraps original errors as __cause__ for proper exception chaining.
    """

    def __init__(self, message: str, cause: Exception | None = None):
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


class TokenizerStuck(DabbrevError):
    """Raised when no transition matches the current character.

    The scan that hit it stops; tokens already indexed stay valid.
    """

    def __init__(
        self,
        message: str,
        *,
        state: object = None,
        char: str = "",
        cause: Exception | None = None,
    ):
        super().__init__(message, cause=cause)
        self.state = state
        self.char = char


class HintError(DabbrevError):
    """Raised when a completion hint cannot be extracted from a line."""
