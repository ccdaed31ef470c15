"""Error types for the vault core."""


class MilaVaultError(Exception):
    """Base class for vault errors."""


class ValidationError(MilaVaultError):
    """A required field is empty; never reaches the record store."""


class NotAuthenticatedError(MilaVaultError):
    """No current owner identity at the start of a mutation."""


class RecordStoreError(MilaVaultError):
    """Raised by record store transports; the message is shown to the user as-is."""


class RemoteWriteError(MilaVaultError):
    """Create/update/delete was rejected or could not reach the store."""


class RefreshError(MilaVaultError):
    """The write succeeded but the follow-up list fetch failed."""


class SessionStateError(MilaVaultError):
    """Operation not valid in the current edit-session state."""


class PersistenceWarning(UserWarning):
    """Local draft storage could not be read or written."""


class PersonNotFoundError(MilaVaultError):
    """No person with that id in the current list."""
