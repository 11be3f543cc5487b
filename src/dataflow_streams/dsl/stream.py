"""Fluent builder and lifecycle handles for streams on a Data Flow server.

A stream is created either from a raw definition::

    stream = Stream.builder(client).name("ticktock").definition("time | log").create().deploy()

or by chaining source, processor and sink applications::

    stream = (Stream.builder(client)
              .name("ticktock")
              .source(StreamApplication("time"))
              .processor(StreamApplication("transform"))
              .sink(StreamApplication("log"))
              .create()
              .deploy())

Each builder stage only exposes the calls allowed at that point, so a sink
can't be added before a source and ``create()`` is only available once the
stream is complete.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional

from ..client import DataFlowClient
from ..errors import DuplicateApplicationError, InvalidArgumentError
from ..models import ApplicationType
from .application import StreamApplication

logger = logging.getLogger(__name__)

STAGE_SEPARATOR = " | "


class _StreamHandle:
    """State shared by the created and deployed stream handles.

    The client is borrowed: handles never close it.
    """

    def __init__(
        self,
        name: str,
        client: DataFlowClient,
        definition: str,
        applications: Optional[List[StreamApplication]] = None,
    ):
        self.name = name
        self.client = client
        self.definition = definition
        self.applications = list(applications or [])

    def destroy(self) -> None:
        """Destroy the stream on the server. The handle must not be used afterwards."""
        self.client.stream_operations.destroy(self.name)

    def get_status(self) -> Optional[str]:
        """Get the current status of the stream as reported by the server."""
        resource = self.client.stream_operations.get_stream_definition(self.name)
        return resource.status

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, definition={self.definition!r})"


class StreamDefinition(_StreamHandle):
    """A stream created on the server but not deployed."""

    def deploy(self, properties: Optional[Dict[str, str]] = None) -> Stream:
        """Deploy this stream.

        Args:
            properties: Extra deployment properties. Properties declared on the
                applications are added as ``deployer.<identity>.<key>``.

        Returns:
            A Stream handle for the deployed stream
        """
        resolved = self._resolve_deployment_properties(properties or {})
        self.client.stream_operations.deploy(self.name, resolved)
        return Stream(self.name, self.client, self.definition, self.applications)

    def _resolve_deployment_properties(self, properties: Dict[str, str]) -> Dict[str, str]:
        resolved = dict(properties)
        for application in self.applications:
            resolved.update(application.resolved_deployment_properties())
        return resolved


class Stream(_StreamHandle):
    """A stream deployed on the Data Flow server."""

    @staticmethod
    def builder(client: DataFlowClient) -> StreamBuilder:
        """Entry point of the fluent builder.

        Args:
            client: Data Flow client used by the created streams

        Returns:
            A builder expecting the stream name
        """
        if client is None:
            raise InvalidArgumentError("Data Flow client can't be None")
        return StreamBuilder(client)

    def undeploy(self) -> StreamDefinition:
        """Undeploy this stream, keeping its definition.

        Returns:
            A StreamDefinition that can be deployed again
        """
        self.client.stream_operations.undeploy(self.name)
        return StreamDefinition(self.name, self.client, self.definition, self.applications)


class StreamBuilder:
    """First builder stage, expecting the stream name."""

    def __init__(self, client: DataFlowClient):
        self._client = client

    def name(self, name: str) -> StreamNameBuilder:
        return StreamNameBuilder(name, self._client)


class StreamNameBuilder:
    """Holds the stream being assembled and accepts a source or a raw definition."""

    def __init__(self, name: str, client: DataFlowClient):
        if not name:
            raise InvalidArgumentError("Stream name can't be empty")
        self._name = name
        self._client = client
        self._applications: List[StreamApplication] = []

    @property
    def applications(self) -> List[StreamApplication]:
        return list(self._applications)

    def source(self, source: StreamApplication) -> SourceBuilder:
        """Append the source application of this stream."""
        self._add_application(source, ApplicationType.SOURCE)
        return SourceBuilder(self)

    def definition(self, definition: str) -> StreamDefinitionBuilder:
        """Use a raw stream DSL definition instead of chaining applications."""
        if not definition:
            raise InvalidArgumentError("Stream definition can't be empty")
        return StreamDefinitionBuilder(self._name, self._client, definition)

    def render_definition(self) -> str:
        return STAGE_SEPARATOR.join(app.definition for app in self._applications)

    def _create(self) -> StreamDefinition:
        return _create_stream(self._name, self._client, self.render_definition(), self._applications)

    def _add_application(self, application: StreamApplication, app_type: ApplicationType) -> None:
        if application is None:
            raise InvalidArgumentError(f"{app_type.value.capitalize()} application can't be None")
        if self._contains(application.identity, app_type):
            raise DuplicateApplicationError(
                f"Stream '{self._name}' already has a {app_type.value} "
                f"'{application.identity}'")
        self._applications.append(application.with_type(app_type))

    def _contains(self, identity: str, app_type: ApplicationType) -> bool:
        for app in self._applications:
            if app.type == app_type and app.identity == identity:
                return True
        return False


class StreamDefinitionBuilder:
    """Final stage of a stream built from a raw definition."""

    def __init__(self, name: str, client: DataFlowClient, definition: str):
        self._name = name
        self._client = client
        self._definition = definition

    def create(self) -> StreamDefinition:
        """Create the stream on the server."""
        return _create_stream(self._name, self._client, self._definition, [])


class _ApplicationBuilder:

    def __init__(self, parent: StreamNameBuilder):
        self._parent = parent

    @property
    def applications(self) -> List[StreamApplication]:
        return self._parent.applications


class SourceBuilder(_ApplicationBuilder):
    """Stage reached after the source, accepting processors or the sink."""

    def processor(self, processor: StreamApplication) -> ProcessorBuilder:
        self._parent._add_application(processor, ApplicationType.PROCESSOR)
        return ProcessorBuilder(self._parent)

    def sink(self, sink: StreamApplication) -> SinkBuilder:
        self._parent._add_application(sink, ApplicationType.SINK)
        return SinkBuilder(self._parent)


class ProcessorBuilder(SourceBuilder):
    """Stage reached after a processor, accepting more processors or the sink."""

    pass


class SinkBuilder(_ApplicationBuilder):
    """Final stage of a stream built from applications."""

    @property
    def definition(self) -> str:
        return self._parent.render_definition()

    def create(self) -> StreamDefinition:
        """Create the stream on the server."""
        return self._parent._create()


def _create_stream(
    name: str,
    client: DataFlowClient,
    definition: str,
    applications: List[StreamApplication],
) -> StreamDefinition:
    client.stream_operations.create_stream(name, definition, deploy=False)
    logger.info(f"Created stream '{name}'")
    return StreamDefinition(name, client, definition, applications)
