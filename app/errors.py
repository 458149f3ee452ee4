from __future__ import annotations


class SyncError(Exception):
    """Base class for every failure a synchronization can surface."""


class RemoteError(SyncError):
    pass


class RemoteTransportError(RemoteError):
    """The Quaver API could not be reached, or answered with something that
    could not be decoded."""


class RemoteReportedError(RemoteError):
    """The Quaver API answered with its own error envelope (anything but a 404)."""

    def __init__(self, status: int, error: str) -> None:
        super().__init__(f"Quaver API error (status={status}): {error}")
        self.status = status
        self.error = error


class UserNotFound(SyncError):
    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} was not found on the Quaver API")
        self.user_id = user_id


class StoreError(SyncError):
    """Persisting a synchronization failed; the transaction was rolled back.

    The driver error is available as `__cause__`.
    """


class CooldownActive(SyncError):
    """Policy rejection: the user was synchronized too recently."""

    def __init__(self, seconds_remaining: int) -> None:
        super().__init__(
            f"Updated too recently; wait {seconds_remaining} more seconds",
        )
        self.seconds_remaining = seconds_remaining
