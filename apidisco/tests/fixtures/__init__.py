"""Test fixtures for apidisco tests.

This module provides sample discovery documents and a fake HTTP transport
serving them, so client trees can be built without a network.
"""

import json
from collections.abc import Callable

import httpx

DISCOVERY_URL = 'https://api.example.com/api-docs'
API_BASE = 'https://api.example.com/v1'

# Root index with two groups
ROOT_DOCUMENT = {
    'apis': [
        {'path': '/users', 'description': 'User operations'},
        {'path': '/pet_store', 'description': 'Pet store operations'},
    ]
}

USERS_DOCUMENT = {
    'apis': [
        {
            'path': '/users',
            'description': 'User collection',
            'operations': [
                {
                    'nickname': 'CreateUser',
                    'method': 'POST',
                    'summary': 'Create a user',
                    'notes': '',
                    'parameters': [
                        {'name': 'name', 'paramType': 'body', 'required': True}
                    ],
                }
            ],
        },
        {
            'path': '/users/{id}',
            'description': 'A single user',
            'operations': [
                {
                    'nickname': 'GetUser',
                    'method': 'GET',
                    'summary': 'Fetch one user',
                    'notes': 'Returns the user.',
                    'parameters': [
                        {'name': 'id', 'paramType': 'path', 'required': True}
                    ],
                },
                {
                    'nickname': 'UpdateUser',
                    'method': 'PUT',
                    'summary': 'Update one user',
                    'notes': '',
                    'parameters': [
                        {'name': 'id', 'paramType': 'path', 'required': True},
                        {'name': 'name', 'paramType': 'body', 'required': True},
                        {'name': 'email', 'paramType': 'body'},
                    ],
                },
            ],
        },
        {
            'path': '/users/{id}/posts/{postId}',
            'description': 'A single post of a user',
            'operations': [
                {
                    'nickname': 'GetPost',
                    'method': 'GET',
                    'summary': 'Fetch one post',
                    'notes': 'Paged comments: ?limit={limit}&offset={offset} are optional',
                    'parameters': [
                        {'name': 'id', 'paramType': 'path', 'required': True},
                        {'name': 'postId', 'paramType': 'path', 'required': True},
                        {'name': 'limit', 'paramType': 'query'},
                        {'name': 'offset', 'paramType': 'query'},
                    ],
                }
            ],
        },
    ]
}

PET_STORE_DOCUMENT = {
    'apis': [
        {
            'path': '/pets',
            'description': 'Pets',
            'operations': [
                {
                    'nickname': 'list_pets',
                    'method': 'GET',
                    'summary': 'List pets',
                    'notes': 'Filter with ?status={status}&tag={tag}',
                    'parameters': [
                        {'name': 'status', 'paramType': 'query'},
                        {'name': 'tag', 'paramType': 'query'},
                    ],
                },
                {
                    'nickname': 'AddPet',
                    'method': 'POST',
                    'summary': 'Add a pet',
                    'notes': 'Optionally ?dryRun={dryRun}',
                    'parameters': [
                        {'name': 'dryRun', 'paramType': 'query'},
                        {'name': 'name', 'paramType': 'body', 'required': True},
                        {'name': 'status', 'paramType': 'body'},
                    ],
                },
            ],
        }
    ]
}

DOCUMENTS = {
    DISCOVERY_URL: ROOT_DOCUMENT,
    f'{DISCOVERY_URL}/users': USERS_DOCUMENT,
    f'{DISCOVERY_URL}/pet_store': PET_STORE_DOCUMENT,
}


def json_response(payload, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode(),
        headers={'content-type': 'application/json; charset=utf-8'},
    )


def discovery_handler(
    documents: dict | None = None,
    api: Callable[[httpx.Request], httpx.Response] | None = None,
    requests: list | None = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Build a MockTransport handler serving discovery documents.

    Requests for a URL in ``documents`` get that document as JSON; any other
    request is passed to ``api`` (404 when absent). Every request is appended
    to ``requests`` when given.
    """
    documents = DOCUMENTS if documents is None else documents

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        url = str(request.url)
        if url in documents:
            return json_response(documents[url])
        if api is not None:
            return api(request)
        return httpx.Response(404)

    return handler


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
