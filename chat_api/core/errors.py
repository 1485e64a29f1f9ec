from __future__ import annotations


class ChatAPIError(RuntimeError):
    """Base for errors that end a request with a fixed status code.

    The message is short and safe to return to clients.
    """

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ChatAPIError):
    status_code = 400


class NotFoundError(ChatAPIError):
    status_code = 404


class StorageError(ChatAPIError):
    status_code = 500

    def __init__(self, message: str = "internal error"):
        super().__init__(message)
