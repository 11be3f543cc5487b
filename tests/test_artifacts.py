"""Tests for artifact coordinate parsing."""

import pytest
from pydantic import ValidationError

from dataflow_streams.artifacts import (
    DockerCoordinate,
    MavenCoordinate,
    parse_resource,
    resource_version,
    resource_without_version,
)
from dataflow_streams.errors import InvalidArgumentError


class TestMavenResource:
    """Test Maven coordinate processing."""

    def test_maven_resource_processing(self):
        """Test version-less id and version of a Maven coordinate."""
        resource = MavenCoordinate(
            group_id="org.springframework.cloud.task.app",
            artifact_id="timestamp-task",
            version="1.0.0.RELEASE"
        )
        assert resource_without_version(
            resource) == "maven://org.springframework.cloud.task.app:timestamp-task"
        assert resource_version(resource) == "1.0.0.RELEASE"

    @pytest.mark.parametrize("version", ["1.0.0", "2.1.0-SNAPSHOT", "latest"])
    def test_id_independent_of_version(self, version):
        """Test the canonical id does not depend on the version."""
        resource = MavenCoordinate(group_id="g", artifact_id="a", version=version)
        assert resource_without_version(resource) == "maven://g:a"
        assert resource_version(resource) == version

    def test_empty_version_rejected(self):
        """Test empty coordinate fields are rejected."""
        with pytest.raises(ValueError, match="can't be empty"):
            MavenCoordinate(group_id="g", artifact_id="a", version="")

    def test_uri_with_classifier(self):
        """Test URI rendering with extension and classifier."""
        resource = MavenCoordinate(group_id="g", artifact_id="a", version="1.0",
                                   extension="jar", classifier="exec")
        assert resource.uri == "maven://g:a:jar:exec:1.0"


class TestDockerResource:
    """Test Docker reference processing."""

    def test_docker_resource_processing(self):
        """Test version-less id and tag of a Docker reference."""
        resource = DockerCoordinate(
            image="springcloudstream/file-source-kafka-10:1.2.0.RELEASE")
        assert resource_without_version(
            resource) == "docker:springcloudstream/file-source-kafka-10"
        assert resource_version(resource) == "1.2.0.RELEASE"

    def test_invalid_docker_resource_processing(self):
        """Test a reference with two colons is rejected."""
        resource = DockerCoordinate(
            image="springcloudstream:file-source-kafka-10:1.2.0.RELEASE")
        with pytest.raises(InvalidArgumentError):
            resource_without_version(resource)

    def test_docker_resource_without_tag(self):
        """Test a reference without colon is rejected."""
        resource = DockerCoordinate(image="springcloudstream/log-sink")
        with pytest.raises(InvalidArgumentError, match="repository:tag"):
            resource_without_version(resource)
        with pytest.raises(InvalidArgumentError):
            resource_version(resource)

    def test_docker_resource_with_empty_parts(self):
        """Test an empty repository or tag is rejected."""
        with pytest.raises(InvalidArgumentError, match="repository:tag"):
            resource_without_version(DockerCoordinate(image=":1.0"))
        with pytest.raises(InvalidArgumentError):
            resource_version(DockerCoordinate(image="repo:"))

    def test_invalid_argument_is_value_error(self):
        """Test InvalidArgumentError can be caught as ValueError."""
        with pytest.raises(ValueError):
            resource_without_version(DockerCoordinate(image="repo:tag:extra"))


class TestParseResource:
    """Test registry URI parsing."""

    def test_parse_maven(self):
        resource = parse_resource(
            "maven://org.springframework.cloud.stream.app:time-source-rabbit:1.2.0.RELEASE")
        assert isinstance(resource, MavenCoordinate)
        assert resource.group_id == "org.springframework.cloud.stream.app"
        assert resource.artifact_id == "time-source-rabbit"
        assert resource.version == "1.2.0.RELEASE"

    def test_parse_maven_with_extension_and_classifier(self):
        resource = parse_resource("maven://g:a:war:exec:1.0")
        assert resource.extension == "war"
        assert resource.classifier == "exec"
        assert resource.version == "1.0"

    def test_parse_docker(self):
        resource = parse_resource("docker:springcloudstream/log-sink-rabbit:1.2.0")
        assert isinstance(resource, DockerCoordinate)
        assert resource.repository == "springcloudstream/log-sink-rabbit"
        assert resource.tag == "1.2.0"
        assert resource.uri == "docker:springcloudstream/log-sink-rabbit:1.2.0"

    @pytest.mark.parametrize("uri", [
        "",
        "maven://g:a",
        "docker:repo",
        "docker:repo:tag:extra",
        "docker::1.0",
        "docker:repo:",
        "docker:",
        "maven://g::1.0",
        "maven://:a:1.0",
        "file:///tmp/app.jar",
    ])
    def test_parse_invalid(self, uri):
        with pytest.raises(InvalidArgumentError):
            parse_resource(uri)

    def test_unsupported_type(self):
        with pytest.raises(InvalidArgumentError, match="Unsupported resource type"):
            resource_without_version("maven://g:a:1.0")

    def test_empty_maven_field_is_invalid_argument(self):
        """Test field validation failures surface as InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="can't be empty") as exc_info:
            parse_resource("maven://g::1.0")
        assert isinstance(exc_info.value.__cause__, ValidationError)
