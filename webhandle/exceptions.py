from __future__ import annotations

from typing import Optional


class WebHandleException(Exception):
    """Base exception for all webhandle errors."""

    message = 'An unexpected error occurred'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class ProtocolError(WebHandleException):
    """The browser rejected a protocol call (bad handle, bad params, connection fault)."""

    message = 'The browser rejected the command'

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class EvaluationError(WebHandleException):
    """A script evaluated in the page threw an exception."""

    message = 'Script evaluation raised an exception'

    def __init__(self, description: Optional[str] = None):
        super().__init__(description)
        self.description = self.message


class CancellationError(WebHandleException):
    """The execution scope ended before the operation completed."""

    message = 'Execution scope was cancelled'


class NotFoundInAnyFrame(WebHandleException):
    """No frame reachable from the page owns the requested node."""

    message = 'The node could not be resolved in any known frame'


class ElementNotFound(WebHandleException):
    """A selector query did not match any element."""

    message = 'Element not found'


class InvalidFileExtension(WebHandleException):
    """The screenshot path has an unsupported extension."""

    message = 'Unsupported file extension'


class InvalidDataURI(WebHandleException):
    """The value returned by the page is not a base64 data URI."""

    message = 'Invalid data URI'


class DomainToggleError(WebHandleException):
    """
    Disabling a protocol domain failed.

    When the protected block had already failed, ``original`` holds that error
    and ``release_error`` the failure of the disable call, so neither is lost.
    """

    message = 'Failed to disable protocol domain'

    def __init__(
        self,
        domain: str,
        release_error: BaseException,
        original: Optional[BaseException] = None,
    ):
        detail = f'Failed to disable {domain} domain: {release_error}'
        if original is not None:
            detail = f'{detail} (while handling: {original!r})'
        super().__init__(detail)
        self.domain = domain
        self.release_error = release_error
        self.original = original


class HandleReleaseError(WebHandleException):
    """One or more transient remote handles could not be released."""

    message = 'Failed to release remote handles'

    def __init__(
        self,
        errors: list[BaseException],
        original: Optional[BaseException] = None,
    ):
        detail = f'Failed to release {len(errors)} remote handle(s): {errors[0]}'
        if original is not None:
            detail = f'{detail} (while handling: {original!r})'
        super().__init__(detail)
        self.errors = errors
        self.original = original
