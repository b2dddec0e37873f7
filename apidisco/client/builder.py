"""Client synthesis from a discovery document.

This module provides :class:`ClientBuilder`, which fetches a two-level
discovery document and turns every discovered operation into a generated
method on a :class:`~apidisco.client.tree.ClientTree`, and the
:func:`build_api_client` entry point.
"""

import asyncio
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Literal

import httpx

from apidisco.client.classifier import ArgumentClassifier, ScoringClassifier
from apidisco.client.executor import RequestExecutor
from apidisco.client.tree import ClientTree, GroupClient, OperationMethod
from apidisco.discovery.loader import DiscoveryLoader
from apidisco.discovery.models import GroupDocument, GroupRef
from apidisco.exceptions import OperationCollisionError
from apidisco.utils import DEFAULT_HEADERS, group_name, merge_headers, operation_name

if TYPE_CHECKING:
    from apidisco.config import ClientConfig

logger = logging.getLogger(__name__)

CollisionPolicy = Literal['error', 'override']


class ClientBuilder:
    """Builds a :class:`ClientTree` from a discovery URL.

    The root index is fetched first; every group document is then fetched
    concurrently. The build succeeds only once all groups are fetched and
    all operations attached; any failure aborts it.

    Example:
        >>> builder = ClientBuilder(
        ...     'https://api.example.com/api-docs',
        ...     'https://api.example.com',
        ...     {'Authorization': 'Bearer token'},
        ... )
        >>> client = await builder.build()
        >>> await client.users.getUser(42)
    """

    def __init__(
        self,
        discovery_url: str,
        api_base: str,
        headers: Mapping[str, str] | None = None,
        *,
        classifier: ArgumentClassifier | None = None,
        http_client: httpx.AsyncClient | None = None,
        on_collision: CollisionPolicy = 'error',
    ):
        """Initialize the builder.

        Args:
            discovery_url: URL of the root discovery document.
            api_base: Prefix of every generated request URL.
            headers: Default request headers, overriding ``Accept`` and
                    ``Content-Type: application/json``.
            classifier: Argument classification strategy for generated
                       methods. Defaults to :class:`ScoringClassifier`.
            http_client: Optional async HTTP client used for discovery and
                        for generated methods.
            on_collision: What to do when two operations (or groups) map to
                         the same name: ``'error'`` raises
                         :class:`OperationCollisionError`, ``'override'``
                         keeps the last one.
        """
        if on_collision not in ('error', 'override'):
            raise ValueError(f'Unknown collision policy: {on_collision!r}')
        self.discovery_url = discovery_url
        self.api_base = api_base
        self.headers = merge_headers(DEFAULT_HEADERS, headers)
        self.classifier = classifier or ScoringClassifier()
        self.on_collision = on_collision
        self._http_client = http_client

    @classmethod
    def from_config(
        cls, config: 'ClientConfig', **kwargs
    ) -> 'ClientBuilder':
        return cls(
            config.discovery_url,
            config.api_base,
            config.headers,
            on_collision=config.on_collision,
            **kwargs,
        )

    async def build(self) -> ClientTree:
        """Fetch the discovery document and synthesize the client tree.

        Raises:
            DiscoveryFetchError: If the root or any group document fails to load.
            OperationCollisionError: On a name collision under the ``'error'`` policy.
        """
        if self._http_client is not None:
            return await self._build(self._http_client)
        async with httpx.AsyncClient(follow_redirects=True, timeout=None) as client:
            return await self._build(client)

    async def _build(self, http_client: httpx.AsyncClient) -> ClientTree:
        loader = DiscoveryLoader(self.discovery_url, self.headers, http_client)
        executor = RequestExecutor(self.headers, self._http_client)

        root = await loader.fetch_root()

        discovered: list[tuple[GroupRef, GroupClient]] = []
        groups: dict[str, GroupClient] = {}
        for ref in root.apis:
            name = group_name(ref.path)
            self._check_collision(name in groups, name)
            group = GroupClient(name, ref.path, ref.description)
            groups[name] = group
            discovered.append((ref, group))

        docs: list[str] = []

        async def discover(ref: GroupRef, name: str, group: GroupClient) -> None:
            document = await loader.fetch_group(ref.path)
            logger.debug(ref.description)
            group_docs = self._attach_operations(name, group, document, executor)
            if groups[name] is group:
                docs.extend(group_docs)

        await asyncio.gather(
            *(discover(ref, group_name(ref.path), group) for ref, group in discovered)
        )
        logger.debug(f'Discovered {len(groups)} groups from {self.discovery_url}')
        return ClientTree(groups, docs)

    def _attach_operations(
        self,
        name: str,
        group: GroupClient,
        document: GroupDocument,
        executor: RequestExecutor,
    ) -> list[str]:
        """Attach one generated method per operation; return the group's docs lines."""
        docs = []
        for api in document.apis:
            docs.append(f'\t{api.description} {api.path}')
            docs.append('\t\tOperations:')
            for operation in api.operations:
                method_name = operation_name(operation.nickname)
                self._check_collision(method_name in group, name, method_name)
                method = OperationMethod(
                    group=name,
                    name=method_name,
                    path_template=api.path,
                    operation=operation,
                    api_base=self.api_base,
                    classifier=self.classifier,
                    executor=executor,
                )
                group._attach(method)
                docs.append(f'\t\t\t{method.signature}')
                docs.append(f'\t\t\t{operation.method} {operation.summary}')
        return docs

    def _check_collision(self, collides: bool, group: str, name: str | None = None) -> None:
        if not collides:
            return
        if self.on_collision == 'error':
            raise OperationCollisionError(group, name)
        target = group if name is None else f'{group}.{name}'
        logger.warning(f"Duplicate name '{target}': last definition wins")


async def build_api_client(
    discovery_url: str,
    api_base: str,
    default_headers: Mapping[str, str] | None = None,
    **options,
) -> ClientTree:
    """Discover an API and return its synthesized client tree.

    Args:
        discovery_url: URL of the root discovery document.
        api_base: Prefix of every generated request URL.
        default_headers: Headers overriding the JSON defaults.
        **options: Passed to :class:`ClientBuilder` (``classifier``,
                  ``http_client``, ``on_collision``).
    """
    builder = ClientBuilder(discovery_url, api_base, default_headers, **options)
    return await builder.build()
