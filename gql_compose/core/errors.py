"""Exceptions raised while building GraphQL requests."""


class BuildError(Exception):
    """Base class for request building errors."""


class InputError(BuildError):
    """Raised when an input tree does not have the expected shape."""

    def __init__(self, message: str, path: str = ""):
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class MaxDepthExceeded(BuildError):
    """Raised when nesting goes deeper than the configured limit."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Nesting exceeds maximum depth of {max_depth}")
