class Js2TsError(Exception):
    """Base class for every error raised by js2ts."""


class PrerequisiteError(Js2TsError):
    """A precondition for the run is missing. Raised before anything is modified."""


class ConversionError(Js2TsError):
    """A single file could not be converted by the remote model."""


class RetryableError(ConversionError):
    """An attempt failed in a way that a later attempt may not."""


class NetworkError(RetryableError):
    pass


class ApiError(RetryableError):
    """Non-2xx status other than 401/429, or a response with status 'failed'."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class RateLimited(RetryableError):
    pass


class MalformedResponse(RetryableError):
    pass


class ValidationFailure(RetryableError):
    """The model answered, but the text does not look like code."""


class AuthError(ConversionError):
    """Credentials were rejected. Retrying cannot help."""


class ExhaustedRetries(ConversionError):
    def __init__(self, message, attempts, last_error=None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class RewriteError(Js2TsError):
    """Writing the converted file failed; the original file is left in place."""
