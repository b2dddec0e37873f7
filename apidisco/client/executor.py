"""HTTP execution and response negotiation for generated methods."""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

import httpx

from apidisco.exceptions import ApiError, ResponseDecodeError, UnsupportedContentTypeError
from apidisco.utils import camelize_keys

logger = logging.getLogger(__name__)


class RequestExecutor:
    """Sends requests for generated methods and decodes their responses.

    Holds an immutable copy of the request headers, shared by every generated
    method of one client tree. Requests go through the injected
    ``http_client`` when given, otherwise through a client opened for the
    duration of the request. No timeout is applied and nothing is retried.
    """

    def __init__(
        self,
        headers: Mapping[str, str] | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.headers = MappingProxyType(dict(headers or {}))
        self._http_client = http_client

    async def execute(
        self, method: str, url: str, body: Mapping[str, Any] | None = None
    ) -> Any:
        """Send one request and return its decoded response.

        Returns:
            The camelized JSON payload for ``application/json`` responses, or
            the raw :class:`httpx.Response` for ``text/html`` responses.

        Raises:
            ApiError: If the status is not 200.
            UnsupportedContentTypeError: If a 200 response has any other content type.
            ResponseDecodeError: If a 200 JSON response body cannot be decoded.
        """
        kwargs: dict[str, Any] = {'headers': dict(self.headers)}
        if body is not None:
            kwargs['json'] = dict(body)

        logger.debug('FETCH %s %s', method.upper(), url)
        if self._http_client:
            response = await self._http_client.request(method.upper(), url, **kwargs)
        else:
            async with httpx.AsyncClient(timeout=None) as client:
                response = await client.request(method.upper(), url, **kwargs)

        return self.handle_response(response)

    def handle_response(self, response: httpx.Response) -> Any:
        content_type = response.headers.get('content-type', '')
        logger.debug('res %s %s', response.status_code, content_type)

        if response.status_code != 200:
            raise ApiError(response.status_code, response.reason_phrase, response)

        if 'text/html' in content_type:
            return response
        if 'application/json' in content_type:
            try:
                payload = response.json()
            except ValueError as e:
                raise ResponseDecodeError(response, cause=e)
            return camelize_keys(payload)

        raise UnsupportedContentTypeError(content_type, response)
