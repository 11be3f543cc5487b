"""Artifact coordinates for deployable stream applications.

Applications are addressed either by a Maven coordinate or by a Docker image
reference. The deployer keys an application by its coordinate without the
version, and tracks the version separately.
"""

from __future__ import annotations
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import InvalidArgumentError, validation_message

MAVEN_SCHEME = "maven://"
DOCKER_SCHEME = "docker:"


class MavenCoordinate(BaseModel):
    """Maven artifact coordinate (group, artifact, version)."""

    model_config = ConfigDict(frozen=True)

    group_id: str
    artifact_id: str
    version: str
    extension: str = "jar"
    classifier: Optional[str] = None

    @field_validator("group_id", "artifact_id", "version")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Maven coordinate fields can't be empty")
        return v

    @property
    def uri(self) -> str:
        """Registry URI form: maven://group:artifact[:extension[:classifier]]:version."""
        parts = [self.group_id, self.artifact_id]
        if self.classifier:
            parts.extend([self.extension, self.classifier])
        elif self.extension != "jar":
            parts.append(self.extension)
        parts.append(self.version)
        return MAVEN_SCHEME + ":".join(parts)


class DockerCoordinate(BaseModel):
    """Docker image reference of the form ``repository:tag``."""

    model_config = ConfigDict(frozen=True)

    image: str

    @field_validator("image")
    @classmethod
    def image_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Docker image can't be empty")
        return v

    def _split(self) -> tuple[str, str]:
        parts = self.image.split(":")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise InvalidArgumentError(
                f"Invalid docker resource format '{self.image}', expected 'repository:tag'")
        return parts[0], parts[1]

    @property
    def repository(self) -> str:
        return self._split()[0]

    @property
    def tag(self) -> str:
        return self._split()[1]

    @property
    def uri(self) -> str:
        return DOCKER_SCHEME + self.image


ArtifactCoordinate = Union[MavenCoordinate, DockerCoordinate]


def resource_without_version(resource: ArtifactCoordinate) -> str:
    """Get the canonical, version-less identifier of an artifact.

    Args:
        resource: Maven or Docker coordinate

    Returns:
        ``maven://group:artifact`` or ``docker:repository``

    Raises:
        InvalidArgumentError: If the Docker reference doesn't hold exactly one colon
    """
    if isinstance(resource, MavenCoordinate):
        return f"{MAVEN_SCHEME}{resource.group_id}:{resource.artifact_id}"
    if isinstance(resource, DockerCoordinate):
        return f"{DOCKER_SCHEME}{resource.repository}"
    raise InvalidArgumentError(f"Unsupported resource type: {type(resource).__name__}")


def resource_version(resource: ArtifactCoordinate) -> str:
    """Get the version of an artifact (Maven version or Docker tag)."""
    if isinstance(resource, MavenCoordinate):
        return resource.version
    if isinstance(resource, DockerCoordinate):
        return resource.tag
    raise InvalidArgumentError(f"Unsupported resource type: {type(resource).__name__}")


def parse_resource(uri: str) -> ArtifactCoordinate:
    """Parse an app registry URI into a coordinate.

    Supported forms are ``maven://group:artifact[:extension[:classifier]]:version``
    and ``docker:repository:tag``.

    Raises:
        InvalidArgumentError: If the URI is empty, malformed or of an unknown scheme
    """
    if not uri:
        raise InvalidArgumentError("Resource URI can't be empty")

    try:
        if uri.startswith(MAVEN_SCHEME):
            return _parse_maven(uri)
        if uri.startswith(DOCKER_SCHEME):
            coordinate = DockerCoordinate(image=uri[len(DOCKER_SCHEME):])
            # Validate the repository and tag up front
            coordinate._split()
            return coordinate
    except ValidationError as e:
        raise InvalidArgumentError(
            f"Invalid resource '{uri}': {validation_message(e)}") from e

    raise InvalidArgumentError(f"Unsupported resource URI scheme: '{uri}'")


def _parse_maven(uri: str) -> MavenCoordinate:
    parts = uri[len(MAVEN_SCHEME):].split(":")
    if len(parts) == 3:
        group_id, artifact_id, version = parts
        return MavenCoordinate(group_id=group_id, artifact_id=artifact_id, version=version)
    if len(parts) == 4:
        group_id, artifact_id, extension, version = parts
        return MavenCoordinate(group_id=group_id, artifact_id=artifact_id,
                               extension=extension, version=version)
    if len(parts) == 5:
        group_id, artifact_id, extension, classifier, version = parts
        return MavenCoordinate(group_id=group_id, artifact_id=artifact_id,
                               extension=extension, classifier=classifier,
                               version=version)
    raise InvalidArgumentError(
        f"Invalid maven resource '{uri}', expected "
        "'maven://group:artifact[:extension[:classifier]]:version'")
