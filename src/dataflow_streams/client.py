"""Core Data Flow client for issuing REST calls against the server."""

from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator, List, Optional
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from .errors import RemoteOperationFailed
from .models import AboutResource, StreamDefinitionResource


logger = logging.getLogger(__name__)


class DataFlowConfig(BaseModel):
    """Configuration for the Data Flow server connection."""

    host: str = "localhost"
    port: int = 9393
    scheme: str = "http"
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = 30.0

    # Defaults contributed by the local server
    management_path: str = "/management"
    security_basic_enabled: bool = False

    def server_uri(self) -> str:
        """Build the base URI of the Data Flow server."""
        return f"{self.scheme}://{self.host}:{self.port}"

    def management_uri(self) -> str:
        """Build the URI of the server's management endpoints."""
        return self.server_uri() + "/" + self.management_path.strip("/")


class DataFlowClient:
    """Client for connecting to and executing operations on a Data Flow server."""

    def __init__(
        self,
        server_uri: Optional[str] = None,
        *,
        host: str = "localhost",
        port: int = 9393,
        scheme: str = "http",
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize Data Flow client.

        Args:
            server_uri: Base URI of the server, if provided overrides host/port/scheme
            host: Data Flow server host
            port: Data Flow server port
            scheme: http or https
            username: Username for basic authentication
            password: Password for basic authentication
            timeout: Request timeout in seconds
            transport: Optional httpx transport, mainly for tests
        """
        self.config = DataFlowConfig(
            host=host,
            port=port,
            scheme=scheme,
            username=username,
            password=password,
            timeout=timeout,
            security_basic_enabled=username is not None,
        )
        self._server_uri = (server_uri or self.config.server_uri()).rstrip("/")
        self._transport = transport
        self._stream_operations = StreamOperations(self)

    @property
    def server_uri(self) -> str:
        return self._server_uri

    @property
    def stream_operations(self) -> StreamOperations:
        """Operations on stream definitions and deployments."""
        return self._stream_operations

    @contextmanager
    def connection(self) -> Generator[httpx.Client, None, None]:
        """Get an HTTP client context manager bound to the server URI."""
        auth = None
        if self.config.username is not None:
            auth = httpx.BasicAuth(self.config.username, self.config.password or "")
        with httpx.Client(
            base_url=self._server_uri,
            timeout=self.config.timeout,
            auth=auth,
            transport=self._transport,
        ) as http:
            yield http

    def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request and raise RemoteOperationFailed on any failure.

        Args:
            method: HTTP method
            path: Path relative to the server URI
            **kwargs: Passed through to httpx

        Returns:
            The successful response
        """
        logger.debug(f"{method} {self._server_uri}{path}")
        try:
            with self.connection() as http:
                response = http.request(method, path, **kwargs)
                response.raise_for_status()
                return response
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.error(f"{method} {path} failed with {e.response.status_code}: {message}")
            raise RemoteOperationFailed(
                f"{method} {path} failed: {message}",
                status_code=e.response.status_code) from e
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise RemoteOperationFailed(f"{method} {path} failed: {e}") from e

    def about(self) -> AboutResource:
        """Get the server's /about information."""
        return AboutResource.model_validate(self.request("GET", "/about").json())

    def health_check(self) -> bool:
        """Check if the Data Flow server is healthy and responsive.

        Returns:
            True if the server answered, False otherwise
        """
        try:
            self.about()
            return True
        except RemoteOperationFailed as e:
            logger.warning(f"Health check failed: {e}")
            return False

    def get_version(self) -> str:
        """Get Data Flow server version.

        Returns:
            Server version string
        """
        try:
            return self.about().server_version
        except RemoteOperationFailed as e:
            logger.warning(f"Failed to get version: {e}")
            return "Unknown"


class StreamOperations:
    """REST operations on streams, keyed by stream name."""

    def __init__(self, client: DataFlowClient):
        self.client = client

    def create_stream(
        self,
        name: str,
        definition: str,
        deploy: bool = False,
    ) -> StreamDefinitionResource:
        """Register a stream definition on the server.

        Args:
            name: Stream name
            definition: Stream DSL, e.g. ``time | log``
            deploy: Whether the server should deploy the stream right away

        Returns:
            The created stream definition resource
        """
        logger.info(f"Creating stream '{name}': {definition}")
        response = self.client.request(
            "POST",
            "/streams/definitions",
            data={"name": name, "definition": definition,
                  "deploy": str(deploy).lower()},
        )
        if response.content:
            return StreamDefinitionResource.model_validate(response.json())
        return StreamDefinitionResource(name=name, dsl_text=definition)

    def deploy(self, name: str, properties: Optional[Dict[str, str]] = None) -> None:
        """Deploy a previously created stream.

        Args:
            name: Stream name
            properties: Deployment properties
        """
        logger.info(f"Deploying stream '{name}'")
        self.client.request("POST", f"/streams/deployments/{_segment(name)}",
                            json=properties or {})

    def undeploy(self, name: str) -> None:
        """Stop the running instances of a stream, keeping its definition."""
        logger.info(f"Undeploying stream '{name}'")
        self.client.request("DELETE", f"/streams/deployments/{_segment(name)}")

    def undeploy_all(self) -> None:
        """Undeploy every stream on the server."""
        logger.info("Undeploying all streams")
        self.client.request("DELETE", "/streams/deployments")

    def destroy(self, name: str) -> None:
        """Delete a stream definition, undeploying it first if needed."""
        logger.info(f"Destroying stream '{name}'")
        self.client.request("DELETE", f"/streams/definitions/{_segment(name)}")

    def destroy_all(self) -> None:
        """Destroy every stream on the server."""
        logger.info("Destroying all streams")
        self.client.request("DELETE", "/streams/definitions")

    def get_stream_definition(self, name: str) -> StreamDefinitionResource:
        """Get the current representation of a stream definition."""
        response = self.client.request("GET", f"/streams/definitions/{_segment(name)}")
        return StreamDefinitionResource.model_validate(response.json())

    def list(self) -> List[StreamDefinitionResource]:
        """List stream definitions registered on the server."""
        body = self.client.request("GET", "/streams/definitions").json()
        items = (body.get("_embedded") or {}).get("streamDefinitionResourceList", [])
        return [StreamDefinitionResource.model_validate(item) for item in items]


def _segment(value: str) -> str:
    return quote(value, safe="")


def _error_message(response: httpx.Response) -> str:
    """Extract the server's error message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    # Errors come back as a list of {logref, message} entries
    if isinstance(body, list) and body and isinstance(body[0], dict):
        return "; ".join(str(item.get("message", item)) for item in body)
    if isinstance(body, dict):
        embedded = (body.get("_embedded") or {}).get("errors")
        if embedded:
            return "; ".join(str(item.get("message", item)) for item in embedded)
        if "message" in body:
            return str(body["message"])
    return response.text
