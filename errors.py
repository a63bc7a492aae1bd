"""Error kinds raised by the swing coach backend."""


class InvalidInput(ValueError):
    """Caller passed a value the core cannot work with."""


class StorageError(RuntimeError):
    """The hosted database rejected or failed a request."""


class SignupLimitReached(StorageError):
    """The users database is already at its signup cap."""
