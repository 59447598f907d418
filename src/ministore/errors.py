from __future__ import annotations

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class MiniStoreError(Exception):
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Forbidden(MiniStoreError):
    status_code = 403


class AuthenticityError(Forbidden):
    def __init__(self) -> None:
        super().__init__("Security check failed. Please refresh and try again.")


class AuthorizationError(Forbidden):
    def __init__(self) -> None:
        super().__init__("You do not have permission to perform this action.")


class MalformedRequestError(MiniStoreError):
    status_code = 400


class PersistenceError(MiniStoreError):
    status_code = 500

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE) -> None:
        super().__init__(message)


class SaveInProgressError(MiniStoreError):
    """Raised by the canvas when a save is already outstanding."""

    status_code = 409

    def __init__(self) -> None:
        super().__init__("A save is already in progress.")
