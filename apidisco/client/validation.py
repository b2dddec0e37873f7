"""Call-time argument validation.

Both checks run before any network call. Scalar types are not checked.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from apidisco.discovery.models import Parameter
from apidisco.exceptions import MissingBodyFields, MissingPathArguments


def validate_path_args(path_params: Sequence[Parameter], path_args: Sequence[Any]) -> None:
    """Ensure exactly one path value was supplied per declared path parameter.

    Only the count is compared; values are matched to names by position.

    Raises:
        MissingPathArguments: If the counts differ.
    """
    if len(path_args) != len(path_params):
        raise MissingPathArguments(
            [param.name for param in path_params], received=len(path_args)
        )


def validate_body_args(body_params: Sequence[Parameter], body: Mapping[str, Any]) -> None:
    """Ensure every declared body parameter is a key of ``body``.

    Raises:
        MissingBodyFields: Listing every absent body parameter name.
    """
    missing = [param.name for param in body_params if param.name not in body]
    if missing:
        raise MissingBodyFields(missing)
