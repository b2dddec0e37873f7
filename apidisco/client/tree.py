"""The synthesized client object tree.

A :class:`ClientTree` maps group names to :class:`GroupClient` objects, which
map operation names to :class:`OperationMethod` callables. Both levels are
plain mappings, reachable by item or attribute access, so the tree's shape can
be inspected without making any request.
"""

from collections.abc import Coroutine, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from apidisco.client.classifier import ArgumentClassifier, ClassifiedArgs
from apidisco.client.executor import RequestExecutor
from apidisco.client.templating import build_url, render_path, render_query
from apidisco.client.validation import validate_body_args, validate_path_args
from apidisco.discovery.models import Operation


class OperationMethod:
    """A generated method bound to one discovered operation.

    Calling it classifies and validates the arguments and renders the request
    URL immediately, so argument errors raise at call time before any request
    is made. The returned coroutine performs the request.

    Example:
        >>> user = await client.users.getUser(42)
    """

    def __init__(
        self,
        group: str,
        name: str,
        path_template: str,
        operation: Operation,
        api_base: str,
        classifier: ArgumentClassifier,
        executor: RequestExecutor,
    ):
        self.group = group
        self.name = name
        self.path_template = path_template
        self.operation = operation
        self.api_base = api_base
        self._classifier = classifier
        self._executor = executor
        self._path_params = operation.path_parameters
        self._body_params = operation.body_parameters

    @property
    def method(self) -> str:
        return self.operation.method

    @property
    def summary(self) -> str:
        return self.operation.summary

    @property
    def signature(self) -> str:
        """Call signature shown in the generated docs."""
        args = [param.name for param in self._path_params]
        if self.operation.query_parameters:
            args.append('query')
        if self._body_params:
            args.append('body')
        return f'{self.group}.{self.name}({", ".join(args)})'

    def classify(self, *args: Any, **kwargs: Any) -> ClassifiedArgs:
        """Classify and validate call arguments without sending anything."""
        classified = self._classifier.classify(args, self.operation.parameters, kwargs)
        validate_path_args(self._path_params, classified.path_args)
        if classified.body is not None:
            validate_body_args(self._body_params, classified.body)
        return classified

    def url_for(self, classified: ClassifiedArgs) -> str:
        path = render_path(self.path_template, self._path_params, classified.path_args)
        query_string = render_query(classified.query, self.operation.notes)
        return build_url(self.api_base, path, query_string)

    def __call__(self, *args: Any, **kwargs: Any) -> Coroutine[Any, Any, Any]:
        classified = self.classify(*args, **kwargs)
        url = self.url_for(classified)
        return self._executor.execute(self.operation.method, url, classified.body)

    def __repr__(self) -> str:
        return f'<OperationMethod {self.signature} {self.method.upper()} {self.path_template}>'


class _Namespace(Mapping):
    """Read-only mapping whose entries are also reachable as attributes.

    For public names, entries take precedence over the class's own
    attributes, so a group called ``items`` or an operation called ``get``
    stays reachable as ``client.items`` or ``group.get``. The shadowed
    accessors remain available through the class, e.g.
    ``ClientTree.shape(client)``.
    """

    _entries: dict[str, Any]

    def __getattribute__(self, name: str) -> Any:
        if not name.startswith('_'):
            try:
                entries = object.__getattribute__(self, '_entries')
            except AttributeError:
                entries = {}
            if name in entries:
                return entries[name]
        return object.__getattribute__(self, name)

    def __getattr__(self, name: str) -> Any:
        raise AttributeError(f'{type(self).__name__!s} has no attribute {name!r}')

    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def __getitem__(self, key: str) -> Any:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self._entries))


class GroupClient(_Namespace):
    """The operations of one discovered group."""

    def __init__(self, name: str, path: str, description: str = ''):
        self._name = name
        self._path = path
        self._description = description
        self._entries: dict[str, OperationMethod] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> str:
        return self._path

    @property
    def description(self) -> str:
        return self._description

    @property
    def operations(self) -> Mapping[str, OperationMethod]:
        return MappingProxyType(self._entries)

    def _attach(self, method: OperationMethod) -> None:
        self._entries[method.name] = method

    def __repr__(self) -> str:
        return f'<GroupClient {self._name} operations={list(self._entries)}>'


class ClientTree(_Namespace):
    """Root of a synthesized client: one :class:`GroupClient` per group."""

    def __init__(self, groups: Mapping[str, GroupClient], docs: list[str] | None = None):
        self._entries: dict[str, GroupClient] = dict(groups)
        self._docs = tuple(docs or ())

    @property
    def groups(self) -> Mapping[str, GroupClient]:
        return MappingProxyType(self._entries)

    def operation(self, group: str, name: str) -> OperationMethod:
        """Look up a generated method by group and operation name.

        Raises:
            KeyError: If either name is unknown.
        """
        return self._entries[group][name]

    def shape(self) -> dict[str, list[str]]:
        """Group names mapped to their operation names."""
        return {name: list(group) for name, group in self._entries.items()}

    def format_docs(self) -> str:
        return self._render_docs()

    def print_docs(self) -> None:
        """Write the discovered operation listing to standard output."""
        print(self._render_docs())

    def _render_docs(self) -> str:
        return '\n'.join(['', '', 'API DOCS', *self._docs])

    def __repr__(self) -> str:
        return f'<ClientTree groups={list(self._entries)}>'
