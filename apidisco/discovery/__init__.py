"""Swagger-style discovery document models and loading."""

from apidisco.discovery.loader import DiscoveryLoader, fetch_group, fetch_root
from apidisco.discovery.models import (
    DiscoveryRoot,
    GroupDocument,
    GroupRef,
    Operation,
    OperationGroup,
    Parameter,
    ParamType,
)

__all__ = [
    # Loading
    'DiscoveryLoader',
    'fetch_root',
    'fetch_group',
    # Models
    'DiscoveryRoot',
    'GroupRef',
    'GroupDocument',
    'OperationGroup',
    'Operation',
    'Parameter',
    'ParamType',
]
