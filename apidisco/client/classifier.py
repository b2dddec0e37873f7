"""Call-time argument classification.

A generated method receives an unlabelled mix of scalars and mappings. A
classifier splits them into ordered path values, one query mapping and one
body mapping, using only the operation's declared parameters.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

from apidisco.discovery.models import Parameter, ParamType

__all__ = (
    'ArgumentClassifier',
    'ClassifiedArgs',
    'EnvelopeClassifier',
    'ScoringClassifier',
    'infer_param_type',
)

_MAPPING_BUCKETS = (ParamType.QUERY.value, ParamType.BODY.value)


@dataclass(frozen=True)
class ClassifiedArgs:
    """Request components of one call."""

    path_args: list[Any] = field(default_factory=list)
    query: Mapping[str, Any] | None = None
    body: Mapping[str, Any] | None = None


class ArgumentClassifier(Protocol):
    """Strategy turning call arguments into :class:`ClassifiedArgs`."""

    def classify(
        self,
        args: Sequence[Any],
        parameters: Sequence[Parameter],
        kwargs: Mapping[str, Any] | None = None,
    ) -> ClassifiedArgs: ...


def infer_param_type(obj: Mapping[str, Any], parameters: Sequence[Parameter]) -> str | None:
    """Guess which parameter bucket a mapping was meant for.

    Each declared paramType scores the number of its parameter names found
    among the mapping's keys. The highest score wins; on a tie the bucket
    declared first wins. Returns None when the operation declares no
    parameters.
    """
    counts: dict[str, int] = {}
    for param in parameters:
        counts[param.param_type] = counts.get(param.param_type, 0) + (
            1 if param.name in obj else 0
        )

    best = None
    for param_type, count in counts.items():
        if best is None or count > counts[best]:
            best = param_type
    return best


class ScoringClassifier:
    """Classify arguments by how well their keys overlap declared parameters.

    Arguments are scanned from last to first. Scalars (anything that is not a
    mapping) are path values. A mapping goes to the query or body bucket its
    keys point at, unless that bucket was already filled by a mapping further
    to the right, in which case it falls back to the path values. Path values
    are returned in call order.
    """

    def classify(
        self,
        args: Sequence[Any],
        parameters: Sequence[Parameter],
        kwargs: Mapping[str, Any] | None = None,
    ) -> ClassifiedArgs:
        if kwargs:
            raise TypeError(
                f'unexpected keyword arguments: {", ".join(sorted(kwargs))}'
            )

        path_args: list[Any] = []
        buckets: dict[str, Mapping[str, Any]] = {}

        for arg in reversed(args):
            if isinstance(arg, Mapping):
                param_type = infer_param_type(arg, parameters)
                if param_type in _MAPPING_BUCKETS and param_type not in buckets:
                    buckets[param_type] = arg
                    continue
            path_args.append(arg)

        path_args.reverse()
        return ClassifiedArgs(
            path_args=path_args,
            query=buckets.get(ParamType.QUERY.value),
            body=buckets.get(ParamType.BODY.value),
        )


class EnvelopeClassifier:
    """Classify arguments passed with an explicit calling convention.

    Accepts either keyword arguments ``path=``, ``query=`` and ``body=``, or a
    single positional envelope mapping with those keys. Path values may be a
    sequence (taken in order) or a mapping from path parameter name to value
    (reordered to declaration order). Positional scalars before the envelope
    are prepended to the path values.

    Example:
        >>> client.users.getPost({'path': {'postId': 7, 'id': 42}, 'query': {'limit': 1}})
        >>> client.users.getPost(42, 7, query={'limit': 1})
    """

    envelope_keys = frozenset({'path', 'query', 'body'})

    def classify(
        self,
        args: Sequence[Any],
        parameters: Sequence[Parameter],
        kwargs: Mapping[str, Any] | None = None,
    ) -> ClassifiedArgs:
        envelope: dict[str, Any] = {}
        positional = list(args)

        if (
            positional
            and isinstance(positional[-1], Mapping)
            and positional[-1]
            and set(positional[-1]) <= self.envelope_keys
        ):
            envelope.update(positional.pop())

        for key, value in (kwargs or {}).items():
            if key not in self.envelope_keys:
                raise TypeError(f'unexpected keyword argument: {key}')
            envelope[key] = value

        path = envelope.get('path')
        if isinstance(path, Mapping):
            path_values = [
                path[param.name]
                for param in parameters
                if param.param_type == ParamType.PATH.value and param.name in path
            ]
        elif path is None:
            path_values = []
        elif isinstance(path, (str, bytes)):
            path_values = [path]
        else:
            path_values = list(path)

        return ClassifiedArgs(
            path_args=positional + path_values,
            query=envelope.get('query'),
            body=envelope.get('body'),
        )
