"""Error types for the link service."""


class LinkError(Exception):
    """Base class for errors surfaced by the link service."""

    code = "LinkError"
    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)
        self.message = message or self.code


class InvalidInput(LinkError, ValueError):
    """Missing or malformed request fields."""

    code = "InvalidInput"
    status_code = 400


class CodeConflict(LinkError):
    """The requested short code is already registered."""

    code = "CodeConflict"
    status_code = 409


class NotFound(LinkError):
    """No link is registered under the short code."""

    code = "NotFound"
    status_code = 404


class StoreUnavailable(LinkError):
    """The link store could not complete the operation."""

    code = "StoreUnavailable"
    status_code = 500


class DuplicateCode(Exception):
    """Raised by stores when the uniqueness constraint on short_code rejects an insert."""

    def __init__(self, short_code: str):
        super().__init__(f"Duplicate short code: {short_code}")
        self.short_code = short_code
