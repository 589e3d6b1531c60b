"""
Error kinds shared by the usecases, the repositories and the controllers.

Classification walks the exception chain, so a layer may wrap an error with
``raise SomeError(...) from err`` and callers still see the original kind.
"""


class UsecaseError(Exception):
    """Base class for every classified error raised by this service."""

    def __init__(self, message, details=None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(UsecaseError):
    """Caller-supplied data violates a domain rule."""


class ConflictError(UsecaseError):
    """The operation clashes with the stored state."""


class NotFoundError(UsecaseError):
    """The storage reported no row for the requested id."""


class StorageError(UsecaseError):
    """Opaque wrapper around a failed storage write."""

    def __str__(self):
        if self.__cause__ is not None:
            return f"{self.message}: {self.__cause__}"
        return self.message


def iter_error_chain(err):
    """Yield ``err`` and every exception it was raised from."""
    seen = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = err.__cause__ or err.__context__


def _is_kind(err, kind):
    return any(isinstance(e, kind) for e in iter_error_chain(err))


def is_validation_error(err):
    return _is_kind(err, ValidationError)


def is_conflict_error(err):
    return _is_kind(err, ConflictError)


def is_not_found_error(err):
    return _is_kind(err, NotFoundError)
