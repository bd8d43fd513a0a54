"""Custom exceptions for the fashion variations application."""


class UploadRejectedError(Exception):
    """Raised when a multipart upload fails the intake checks (type, size, field name)."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DownloadError(Exception):
    """Raised when the download proxy cannot fetch the upstream image."""
    pass
