"""Integration tests for the gstc CLI against a fake daemon."""

from __future__ import annotations

from click.testing import CliRunner

from gstc.cli import main


def invoke(fake_daemon, *args: str):
    runner = CliRunner()
    return runner.invoke(
        main,
        ["--address", "127.0.0.1", "--port", str(fake_daemon.port), *args],
        env={"GSTC_PROTOCOL": "tcp"},
    )


class TestCliCommands:
    """Each command sends the expected request."""

    def test_ping(self, fake_daemon) -> None:
        """ping prints OK."""
        result = invoke(fake_daemon, "ping")

        assert result.exit_code == 0
        assert "OK" in result.output
        assert fake_daemon.state.requests == ["read /"]

    def test_pipeline_create_joins_description(self, fake_daemon) -> None:
        """Description words are joined with spaces."""
        result = invoke(fake_daemon, "pipeline", "create", "p0", "fakesrc", "!", "fakesink")

        assert result.exit_code == 0
        assert fake_daemon.state.requests == ["create /pipelines p0 fakesrc ! fakesink"]

    def test_pipeline_state_commands(self, fake_daemon) -> None:
        """play, pause, stop, eos and delete."""
        for command in ("play", "pause", "stop", "eos", "delete"):
            assert invoke(fake_daemon, "pipeline", command, "p0").exit_code == 0

        assert fake_daemon.state.requests == [
            "update /pipelines/p0/state playing",
            "update /pipelines/p0/state paused",
            "update /pipelines/p0/state null",
            "create /pipelines/p0/event eos",
            "delete /pipelines p0",
        ]

    def test_element_set(self, fake_daemon) -> None:
        """element set sends the property update."""
        result = invoke(fake_daemon, "element", "set", "p0", "src", "pattern", "18")

        assert result.exit_code == 0
        assert fake_daemon.state.requests == [
            "update /pipelines/p0/elements/src/properties/pattern 18"
        ]

    def test_bus_wait(self, fake_daemon) -> None:
        """bus wait configures the bus and blocks on the read."""
        result = invoke(fake_daemon, "bus", "wait", "p0", "eos", "--bus-timeout=-1")

        assert result.exit_code == 0
        assert fake_daemon.state.requests == [
            "update /pipelines/p0/bus/types eos",
            "update /pipelines/p0/bus/timeout -1",
            "read /pipelines/p0/bus/message",
        ]


class TestCliFailures:
    """Failures exit non-zero."""

    def test_daemon_error(self, fake_daemon) -> None:
        """A daemon code is reported and exits 1."""
        fake_daemon.state.codes["delete /pipelines"] = 4

        result = invoke(fake_daemon, "pipeline", "delete", "missing")

        assert result.exit_code == 1
        assert "DAEMON_ERROR(4)" in result.output

    def test_unreachable_keep_open(self, free_port: int) -> None:
        """A refused connection with --keep-open exits 1."""
        runner = CliRunner()

        result = runner.invoke(
            main,
            ["--address", "127.0.0.1", "--port", str(free_port), "--keep-open", "ping"],
        )

        assert result.exit_code == 1
        assert "Cannot connect" in result.output

    def test_daemon_description_shown(self, fake_daemon) -> None:
        """The daemon's description follows the failure code."""
        fake_daemon.state.codes["create /pipelines"] = 3

        result = invoke(fake_daemon, "pipeline", "create", "p0", "fakesrc")

        assert result.exit_code == 1
        assert "Failed: DAEMON_ERROR(3) (3): fake" in result.output

    def test_local_failure_has_no_description(self, fake_daemon) -> None:
        """Local failures report only the status."""
        fake_daemon.state.hang_up.add("read /")

        result = invoke(fake_daemon, "ping")

        assert result.exit_code == 1
        assert "Failed: RECV_ERROR (-9)" in result.output
        assert "fake" not in result.output


class TestCliConfiguration:
    """Connection settings come from GSTC_* variables unless given as options."""

    def test_environment_configures_connection(self, fake_daemon) -> None:
        """GSTC_ADDRESS and GSTC_PORT are enough to reach the daemon."""
        runner = CliRunner()

        result = runner.invoke(
            main,
            ["ping"],
            env={"GSTC_ADDRESS": "127.0.0.1", "GSTC_PORT": str(fake_daemon.port)},
        )

        assert result.exit_code == 0
        assert fake_daemon.state.requests == ["read /"]

    def test_option_overrides_environment(self, fake_daemon, free_port: int) -> None:
        """--port wins over GSTC_PORT."""
        runner = CliRunner()

        result = runner.invoke(
            main,
            ["--port", str(fake_daemon.port), "ping"],
            env={"GSTC_ADDRESS": "127.0.0.1", "GSTC_PORT": str(free_port)},
        )

        assert result.exit_code == 0
        assert fake_daemon.state.requests == ["read /"]

    def test_keep_open_from_environment(self, free_port: int) -> None:
        """GSTC_KEEP_OPEN makes the CLI connect before running the command."""
        runner = CliRunner()

        result = runner.invoke(
            main,
            ["--address", "127.0.0.1", "--port", str(free_port), "ping"],
            env={"GSTC_KEEP_OPEN": "1"},
        )

        assert result.exit_code == 1
        assert "Cannot connect" in result.output

    def test_invalid_environment(self) -> None:
        """An unparseable GSTC_PORT is a usage error."""
        runner = CliRunner()

        result = runner.invoke(main, ["ping"], env={"GSTC_PORT": "fivethousand"})

        assert result.exit_code == 2
        assert "Invalid configuration" in result.output
