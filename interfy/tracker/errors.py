class TrackerError(Exception):
    """Base class for interview tracker failures."""


class ValidationError(TrackerError):
    """
    Malformed or missing local input. Raised before the record store is contacted.

    `detail` holds the per-field messages, shaped like DRF serializer errors.
    """

    def __init__(self, detail):
        self.detail = detail
        super().__init__(f"Invalid interview data: {detail}")


class AuthError(TrackerError):
    """No active session, or the record store refused access for this user."""


class BackendError(TrackerError):
    """Transport, permission or store-side rejection of an operation."""


class NotFoundError(BackendError):
    """The targeted record is absent from the caller's own scope."""


class AccountDeletionError(BackendError):
    """
    Account deletion stopped halfway: some uploaded images are gone but the records remain.
    """

    def __init__(self, message, removed_files):
        self.removed_files = removed_files
        super().__init__(message)
