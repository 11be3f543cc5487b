"""Data Flow Streams

A Python SDK for building, deploying and managing streams on a Data Flow server.
"""

from .client import DataFlowClient, DataFlowConfig, StreamOperations
from .models import ApplicationType, StreamDefinitionResource
from .dsl import Stream, StreamApplication, StreamDefinition
from .artifacts import (
    MavenCoordinate,
    DockerCoordinate,
    parse_resource,
    resource_version,
    resource_without_version,
)
from .errors import (
    DataFlowError,
    InvalidArgumentError,
    DuplicateApplicationError,
    RemoteOperationFailed,
)

__all__ = [
    # Core components
    "DataFlowClient",
    "DataFlowConfig",
    "StreamOperations",

    # Stream DSL
    "Stream",
    "StreamApplication",
    "StreamDefinition",

    # Artifact coordinates
    "MavenCoordinate",
    "DockerCoordinate",
    "parse_resource",
    "resource_version",
    "resource_without_version",

    # Data models
    "ApplicationType",
    "StreamDefinitionResource",

    # Errors
    "DataFlowError",
    "InvalidArgumentError",
    "DuplicateApplicationError",
    "RemoteOperationFailed",
]

__version__ = "0.1.0"
