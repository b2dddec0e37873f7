"""apidisco - Synthesize Python clients from Swagger-style discovery documents.

apidisco fetches a two-level discovery document (a root index of API groups,
then one operation list per group) and builds a client object with one async
method per discovered operation. No per-endpoint code is written or generated
on disk: call arguments are classified into path, query and body parts from
the operation's declared parameters at call time.

Quick Start:
    >>> from apidisco import build_api_client
    >>>
    >>> client = await build_api_client(
    ...     'https://api.example.com/api-docs',
    ...     'https://api.example.com',
    ...     {'Authorization': 'Bearer token'},
    ... )
    >>> client.print_docs()
    >>> user = await client.users.getUser(42)
    >>> posts = await client.users.listPosts(42, {'limit': 10})

CLI Usage:
    $ apidisco docs --discovery-url https://api.example.com/api-docs --api-base https://api.example.com
    $ apidisco call users getUser 42 -c apidisco.yaml
"""

from importlib.metadata import PackageNotFoundError, version

from apidisco.client import (
    ArgumentClassifier,
    ClassifiedArgs,
    ClientBuilder,
    ClientTree,
    EnvelopeClassifier,
    GroupClient,
    OperationMethod,
    RequestExecutor,
    ScoringClassifier,
    build_api_client,
)
from apidisco.config import ApiDiscoSettings, ClientConfig, get_config
from apidisco.discovery import DiscoveryLoader, fetch_group, fetch_root
from apidisco.exceptions import (
    ApiDiscoError,
    ApiError,
    ArgumentError,
    ConfigurationError,
    DiscoveryError,
    DiscoveryFetchError,
    MissingBodyFields,
    MissingPathArguments,
    OperationCollisionError,
    ResponseDecodeError,
    UnsupportedContentTypeError,
)

__all__ = [
    # Main entry points
    'build_api_client',
    'ClientBuilder',
    'ClientTree',
    'GroupClient',
    'OperationMethod',
    'RequestExecutor',
    # Argument classification
    'ArgumentClassifier',
    'ClassifiedArgs',
    'ScoringClassifier',
    'EnvelopeClassifier',
    # Discovery
    'DiscoveryLoader',
    'fetch_root',
    'fetch_group',
    # Configuration
    'ApiDiscoSettings',
    'ClientConfig',
    'get_config',
    # Exceptions
    'ApiDiscoError',
    'DiscoveryError',
    'DiscoveryFetchError',
    'OperationCollisionError',
    'ArgumentError',
    'MissingPathArguments',
    'MissingBodyFields',
    'ApiError',
    'UnsupportedContentTypeError',
    'ResponseDecodeError',
    'ConfigurationError',
]

try:
    __version__ = version('apidisco')
except PackageNotFoundError:
    __version__ = 'unknown'
