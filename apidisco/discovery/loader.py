"""Discovery document loading utilities.

This module fetches the two levels of a Swagger-style discovery document over
HTTP: the root index of API groups, then one document per group listing its
operations. Documents are parsed into the models of
:mod:`apidisco.discovery.models`.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from apidisco.discovery.models import DiscoveryRoot, GroupDocument
from apidisco.exceptions import DiscoveryFetchError
from apidisco.utils import merge_headers

logger = logging.getLogger(__name__)

DISCOVERY_HEADERS = {'Accept': 'application/json'}


class DiscoveryLoader:
    """Fetches discovery documents for one discovery URL.

    Every request is a GET carrying ``Accept: application/json`` merged with
    the caller's headers, the caller winning on conflicts. Failures are not
    retried.

    Example:
        >>> loader = DiscoveryLoader('https://api.example.com/api-docs')
        >>> root = await loader.fetch_root()
        >>> for group in root.apis:
        ...     document = await loader.fetch_group(group.path)
    """

    def __init__(
        self,
        discovery_url: str,
        headers: Mapping[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the loader.

        Args:
            discovery_url: URL of the root discovery document. Group documents
                          are fetched from this URL with the group path appended.
            headers: Extra request headers.
            http_client: Optional async HTTP client to use for requests.
                        If not provided, a client is created per request.
        """
        self.discovery_url = discovery_url
        self.headers = merge_headers(DISCOVERY_HEADERS, headers)
        self._http_client = http_client

    def group_url(self, group_path: str) -> str:
        return f'{self.discovery_url}{group_path}'

    async def fetch_root(self) -> DiscoveryRoot:
        """Fetch and parse the root index.

        Raises:
            DiscoveryFetchError: If the document cannot be fetched or parsed.
        """
        return await self._load(self.discovery_url, DiscoveryRoot)

    async def fetch_group(self, group_path: str) -> GroupDocument:
        """Fetch and parse the document of one group.

        Raises:
            DiscoveryFetchError: If the document cannot be fetched or parsed.
        """
        return await self._load(self.group_url(group_path), GroupDocument)

    async def _load(self, url: str, model: type[BaseModel]) -> Any:
        content = await self._get_json(url)
        try:
            return model.model_validate(content)
        except ValidationError as e:
            raise DiscoveryFetchError(url, cause=e)

    async def _get_json(self, url: str) -> Any:
        logger.debug('FETCH %s', url)
        try:
            if self._http_client:
                response = await self._http_client.get(url, headers=self.headers)
            else:
                async with httpx.AsyncClient(
                    follow_redirects=True, timeout=None
                ) as client:
                    response = await client.get(url, headers=self.headers)

            response.raise_for_status()
            return json.loads(response.text)

        except httpx.HTTPError as e:
            raise DiscoveryFetchError(url, cause=e)
        except json.JSONDecodeError as e:
            raise DiscoveryFetchError(url, cause=e)


async def fetch_root(
    discovery_url: str,
    headers: Mapping[str, str] | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> DiscoveryRoot:
    """Fetch the root index of ``discovery_url``."""
    loader = DiscoveryLoader(discovery_url, headers, http_client)
    return await loader.fetch_root()


async def fetch_group(
    discovery_url: str,
    group_path: str,
    headers: Mapping[str, str] | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> GroupDocument:
    """Fetch the document of the group at ``group_path`` under ``discovery_url``."""
    loader = DiscoveryLoader(discovery_url, headers, http_client)
    return await loader.fetch_group(group_path)
