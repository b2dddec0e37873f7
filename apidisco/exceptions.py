"""Custom exceptions for apidisco.

This module defines a hierarchy of exceptions used throughout the apidisco library
to provide clear, actionable error messages for discovery, call-time argument and
downstream API failures.
"""

from typing import Any


class ApiDiscoError(Exception):
    """Base exception for all apidisco errors.

    All exceptions raised by apidisco inherit from this class, making it easy
    to catch all apidisco-related errors with a single except clause.

    Example:
        try:
            client = await build_api_client(discovery_url, api_base)
        except ApiDiscoError as e:
            print(f"apidisco error: {e}")
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class DiscoveryError(ApiDiscoError):
    """Base exception for discovery-related errors."""

    pass


class DiscoveryFetchError(DiscoveryError):
    """Failed to fetch or parse a discovery document.

    Raised when the root index or a group document cannot be fetched,
    returns an unsuccessful status, is not JSON, or lacks the ``apis`` field.
    The whole client build is aborted; nothing is retried.

    Attributes:
        source: The URL that failed to load.
        cause: The underlying exception that caused the failure.
    """

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        message = f"Failed to fetch discovery document from '{source}'"
        if cause:
            message += f': {cause}'
        super().__init__(message)


class OperationCollisionError(DiscoveryError):
    """Two discovered operations (or groups) map to the same client name.

    Attributes:
        group: The group name the collision happened in.
        name: The colliding operation name, or None for a group collision.
    """

    def __init__(self, group: str, name: str | None = None):
        self.group = group
        self.name = name
        if name is None:
            message = f"Duplicate group name '{group}'"
        else:
            message = f"Duplicate operation name '{group}.{name}'"
        super().__init__(message)


class ArgumentError(ApiDiscoError):
    """Base exception for call-time argument errors.

    These are raised synchronously by a generated method, before any
    network call is made.
    """

    pass


class MissingPathArguments(ArgumentError):
    """Wrong number of positional path values for an operation.

    Attributes:
        required: Names of the declared path parameters, in order.
        received: Number of path values actually supplied.
    """

    def __init__(self, required: list[str], received: int):
        self.required = list(required)
        self.received = received
        message = (
            f'{len(self.required)} required, only received {received}. '
            f'[ {",".join(self.required)} ]'
        )
        super().__init__(message)


class MissingBodyFields(ArgumentError):
    """A body object lacks declared body fields.

    Attributes:
        missing: Names of the declared body parameters not present in the body.
    """

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f'Missing body args [ {",".join(self.missing)} ]')


class ApiError(ApiDiscoError):
    """The downstream API answered with a non-200 status.

    Attributes:
        status_code: The HTTP status code.
        reason: The HTTP status text.
        response: The raw response, when available.
    """

    def __init__(self, status_code: int, reason: str = '', response: Any = None):
        self.status_code = status_code
        self.reason = reason
        self.response = response
        super().__init__(f'API ERROR: {status_code} {reason}'.rstrip())


class UnsupportedContentTypeError(ApiError):
    """A 200 response carried a content type the client cannot handle.

    Attributes:
        content_type: The response's Content-Type header value.
    """

    def __init__(self, content_type: str, response: Any = None):
        self.content_type = content_type
        status_code = getattr(response, 'status_code', 200)
        reason = getattr(response, 'reason_phrase', 'OK')
        super().__init__(status_code, reason, response)
        self.message = f"Unsupported response content type '{content_type}'"
        self.args = (self.message,)


class ResponseDecodeError(ApiError):
    """A 200 JSON response whose body could not be decoded.

    Attributes:
        cause: The underlying decoding error.
    """

    def __init__(self, response: Any = None, cause: Exception | None = None):
        self.cause = cause
        status_code = getattr(response, 'status_code', 200)
        reason = getattr(response, 'reason_phrase', 'OK')
        super().__init__(status_code, reason, response)
        self.message = 'Invalid JSON in response body'
        if cause:
            self.message += f': {cause}'
        self.args = (self.message,)


class ConfigurationError(ApiDiscoError):
    """Error in configuration.

    This exception is raised when the configuration is invalid or
    cannot be found.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)
