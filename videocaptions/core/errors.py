"""Exception taxonomy shared by services, collaborators and HTTP handlers."""


class VideoCaptionsError(Exception):
    """Base class for all errors raised by this service."""


class ContentNotFoundError(VideoCaptionsError):
    """The requested content document does not exist upstream."""

    def __init__(self, path: str):
        super().__init__(f"Content not found: {path}")
        self.path = path


class ContentFetchError(VideoCaptionsError):
    """The content source answered with an unexpected status."""


class MalformedContentError(VideoCaptionsError):
    """A content document lacks the data we need from it."""


class InvalidFlagTokenError(VideoCaptionsError):
    """A flag token failed verification.

    Raised with the same message whatever the cause (bad structure, unknown
    tag, non-numeric id, signature mismatch) so callers cannot tell them apart.
    """

    def __init__(self):
        super().__init__("Invalid flag ID")


class FlagSecretMissingError(VideoCaptionsError, RuntimeError):
    """FLAG_SECRET is not configured."""


class RecordStoreError(VideoCaptionsError):
    """The record store rejected or failed a request."""


__all__ = [
    "VideoCaptionsError",
    "ContentNotFoundError",
    "ContentFetchError",
    "MalformedContentError",
    "InvalidFlagTokenError",
    "FlagSecretMissingError",
    "RecordStoreError",
]
