"""Fluent DSL for building and managing streams."""

from .application import StreamApplication
from .stream import (
    Stream,
    StreamBuilder,
    StreamNameBuilder,
    StreamDefinition,
    StreamDefinitionBuilder,
    SourceBuilder,
    ProcessorBuilder,
    SinkBuilder,
)

__all__ = [
    "StreamApplication",
    "Stream",
    "StreamBuilder",
    "StreamNameBuilder",
    "StreamDefinition",
    "StreamDefinitionBuilder",
    "SourceBuilder",
    "ProcessorBuilder",
    "SinkBuilder",
]
