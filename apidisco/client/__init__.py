"""Client synthesis: argument classification, templating, execution and the client tree."""

from apidisco.client.builder import ClientBuilder, build_api_client
from apidisco.client.classifier import (
    ArgumentClassifier,
    ClassifiedArgs,
    EnvelopeClassifier,
    ScoringClassifier,
)
from apidisco.client.executor import RequestExecutor
from apidisco.client.tree import ClientTree, GroupClient, OperationMethod

__all__ = [
    'ClientBuilder',
    'build_api_client',
    'ArgumentClassifier',
    'ClassifiedArgs',
    'ScoringClassifier',
    'EnvelopeClassifier',
    'RequestExecutor',
    'ClientTree',
    'GroupClient',
    'OperationMethod',
]
