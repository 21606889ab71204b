"""Domain exceptions mapped to HTTP error responses."""


class LibraryError(Exception):
    """Base class for errors reported to clients as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LibraryError):
    """An entity id or media id does not resolve."""

    status_code = 404


class ValidationFailure(LibraryError):
    """The request is well-formed but cannot be applied."""

    status_code = 400


class OutOfRangeError(ValidationFailure):
    """A season or episode index is outside the live sequence."""


class CapacityExceededError(ValidationFailure):
    """Adding would push a sequence past its maximum length."""


class MinimumCardinalityError(ValidationFailure):
    """Removing would leave a container empty."""


class BlobStoreError(Exception):
    """Domain exception for object storage failures."""

    def __init__(self, message: str, original_exception: Exception = None):
        super().__init__(message)
        self.original_exception = original_exception
