from typing import Optional


class InputError(ValueError):
    """
    Exception raised when user-supplied input cannot be used.

    Typical causes are a repository URL that does not name an owner and a repository,
    or a missing source argument. The operation is aborted and the message is shown
    to the user unchanged.

    Example:
        >>> error = InputError("Invalid GitHub repository URL: https://example.com")
        >>> str(error)
        'Invalid GitHub repository URL: https://example.com'
    """

    pass


class UpstreamError(Exception):
    """
    Exception raised when the remote listing API answers with a non-200 status.

    The message returned by the API is kept verbatim so that it can be passed
    through to the user without modification.

    Attributes:
        message (str): The upstream error message.
        status_code (Optional[int]): HTTP status code of the failed response.

    Example:
        >>> error = UpstreamError("Server Error", status_code=502)
        >>> str(error)
        'Server Error'
        >>> error.status_code
        502
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        """
        Initialize the exception with the upstream message and status code.

        Args:
            message (str): Error message reported by the API.
            status_code (int, optional): HTTP status code of the response.
        """
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(UpstreamError):
    """
    Exception raised when the requested repository or ref does not exist.

    Raised only after the fallback ref has also been tried.
    """

    pass


class AuthError(UpstreamError):
    """
    Exception raised when the API rejects the request's credentials (HTTP 401/403).
    """

    pass


class RateLimitError(UpstreamError):
    """
    Exception raised when the API rate limit has been exhausted.

    Example:
        >>> error = RateLimitError("API rate limit exceeded for 127.0.0.1.", status_code=403)
        >>> isinstance(error, UpstreamError)
        True
    """

    pass
