"""HashDir custom exception module."""


class NotFoundError(FileNotFoundError):
    """Custom exception thrown when a requested object or alias does not exist
    in the repository. Subclasses `FileNotFoundError` so that absence can always
    be told apart from other I/O failures (`OSError`)."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors


class ConstraintError(NotFoundError):
    """Custom exception thrown when called to link a name to an ID that is not
    stored in the repository."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors


class DecodeError(ValueError):
    """Custom exception thrown when a given string is not valid hex of even length
    and cannot be decoded into an ID."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors


class CorruptDataError(ValueError):
    """Custom exception thrown when an alias record is truncated or does not
    contain valid hex text."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors


class UnsupportedAlgorithm(ValueError):
    """Custom exception thrown when a given algorithm is not supported by `hashlib`
    or does not produce a fixed-length digest."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors
