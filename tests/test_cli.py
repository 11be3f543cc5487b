"""Tests for the command line interface."""

import pytest
from unittest.mock import patch
from typer.testing import CliRunner

from dataflow_streams.cli import app, parse_properties
from dataflow_streams.errors import RemoteOperationFailed
from dataflow_streams.models import StreamDefinitionResource

runner = CliRunner()


@pytest.fixture
def mock_client():
    with patch("dataflow_streams.cli.DataFlowClient") as mock_client_class:
        yield mock_client_class.return_value


class TestParseProperties:
    """Test key=value option parsing."""

    def test_parse(self):
        assert parse_properties(["deployer.log.count=2", "app.*.level = WARN"]) == {
            "deployer.log.count": "2", "app.*.level": "WARN"}

    def test_value_may_contain_equals(self):
        assert parse_properties(["expression=a==b"]) == {"expression": "a==b"}


class TestCommands:
    """Test stream lifecycle commands."""

    def test_create_and_deploy(self, mock_client):
        result = runner.invoke(app, ["create", "ticktock", "time | log", "--deploy",
                                     "-p", "deployer.log.count=2"])
        assert result.exit_code == 0
        assert "Created stream 'ticktock'" in result.output
        mock_client.stream_operations.create_stream.assert_called_once_with(
            "ticktock", "time | log", deploy=False)
        mock_client.stream_operations.deploy.assert_called_once_with(
            "ticktock", {"deployer.log.count": "2"})

    def test_create_without_deploy(self, mock_client):
        result = runner.invoke(app, ["create", "ticktock", "time | log"])
        assert result.exit_code == 0
        mock_client.stream_operations.deploy.assert_not_called()

    def test_create_properties_require_deploy(self, mock_client):
        result = runner.invoke(app, ["create", "ticktock", "time | log",
                                     "-p", "deployer.log.count=2"])
        assert result.exit_code != 0
        mock_client.stream_operations.create_stream.assert_not_called()
        mock_client.stream_operations.deploy.assert_not_called()

    def test_server_options(self):
        with patch("dataflow_streams.cli.DataFlowClient") as mock_client_class:
            result = runner.invoke(app, ["--host", "scdf", "--port", "80", "undeploy", "s"])
        assert result.exit_code == 0
        mock_client_class.assert_called_once_with(
            host="scdf", port=80, username=None, password=None)

    def test_status(self, mock_client):
        mock_client.stream_operations.get_stream_definition.return_value = \
            StreamDefinitionResource(name="ticktock", dslText="time | log", status="deployed")
        result = runner.invoke(app, ["status", "ticktock"])
        assert result.exit_code == 0
        assert "ticktock: deployed" in result.output

    def test_list(self, mock_client):
        mock_client.stream_operations.list.return_value = [
            StreamDefinitionResource(name="ticktock", dslText="time | log", status="deployed")]
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "ticktock" in result.output

    def test_destroy_failure_exits_with_error(self, mock_client):
        mock_client.stream_operations.destroy.side_effect = RemoteOperationFailed(
            "not found", status_code=404)
        result = runner.invoke(app, ["destroy", "ticktock"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_property(self, mock_client):
        result = runner.invoke(app, ["deploy", "ticktock", "-p", "novalue"])
        assert result.exit_code != 0
        mock_client.stream_operations.deploy.assert_not_called()


class TestArtifactCommand:
    """Test the artifact inspection command."""

    def test_docker(self):
        result = runner.invoke(app, ["artifact", "docker:springcloudstream/log-sink:1.2.0"])
        assert result.exit_code == 0
        assert "docker:springcloudstream/log-sink" in result.output
        assert "1.2.0" in result.output

    def test_invalid(self):
        result = runner.invoke(app, ["artifact", "docker:a:b:c"])
        assert result.exit_code == 1
