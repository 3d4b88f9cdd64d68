"""Integration tests for CLI."""

import json

import pytest
from click.testing import CliRunner

from dfa_studio.cli import main


@pytest.fixture
def runner():
    return CliRunner()


class TestSamplesCommand:
    def test_lists_samples(self, runner):
        result = runner.invoke(main, ["samples"])

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert [line.split()[0] for line in lines] == ["sample1", "sample2", "sample3", "sample4"]

    def test_log_level_option(self, runner):
        result = runner.invoke(main, ["--log-level", "debug", "samples"])

        assert result.exit_code == 0


class TestCheckCommand:
    def test_valid_sample(self, runner):
        result = runner.invoke(main, ["check", "sample1"])

        assert result.exit_code == 0
        assert "Validation passed" in result.output

    def test_warnings_pass_by_default(self, runner):
        result = runner.invoke(main, ["check", "sample4"])

        assert result.exit_code == 0
        assert "INCOMPLETE_STATE" in result.output

    def test_strict_mode(self, runner):
        result = runner.invoke(main, ["check", "sample4", "--strict"])

        assert result.exit_code == 1

    def test_json_output(self, runner):
        result = runner.invoke(main, ["check", "sample2", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["issues"] == []

    def test_unknown_sample(self, runner):
        result = runner.invoke(main, ["check", "nope"])

        assert result.exit_code == 2
        assert "Unknown sample 'nope'" in result.output


class TestSimulateCommand:
    def test_accepted(self, runner):
        result = runner.invoke(main, ["simulate", "sample1", "111"])

        assert result.exit_code == 0
        assert "Accepted" in result.output

    def test_rejected(self, runner):
        result = runner.invoke(main, ["simulate", "sample1", "101"])

        assert result.exit_code == 1
        assert "Path: a -> b -> b -> a" in result.output
        assert "Rejected" in result.output

    def test_missing_transition(self, runner):
        result = runner.invoke(main, ["simulate", "sample4", "aa"])

        assert result.exit_code == 1
        assert "Aborted" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(main, ["simulate", "sample2", "bb", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["path"] == ["q", "s", "t"]
        assert data["accepted"] is True

    def test_animate(self, runner):
        result = runner.invoke(
            main, ["simulate", "sample4", "a", "--animate", "--speed", "1000"]
        )

        assert result.exit_code == 0
        assert "+ flickering" in result.output
        assert "Accepted" in result.output

    def test_speed_from_env(self, runner):
        result = runner.invoke(
            main,
            ["simulate", "sample4", "a", "--animate"],
            env={"DFA_STUDIO_SPEED": "1000"},
        )

        assert result.exit_code == 0

    def test_invalid_speed(self, runner):
        result = runner.invoke(main, ["simulate", "sample4", "a", "--speed", "0"])

        assert result.exit_code == 2

    def test_unknown_sample(self, runner):
        result = runner.invoke(main, ["simulate", "nope", "a"])

        assert result.exit_code == 2


class TestRenderCommand:
    def test_stdout(self, runner):
        result = runner.invoke(main, ["render", "sample1", "--seed", "1"])

        assert result.exit_code == 0
        assert result.output.startswith("<svg")
        assert ">a</text>" in result.output

    def test_seeded_output_is_stable(self, runner):
        first = runner.invoke(main, ["render", "sample3", "--seed", "5"])
        second = runner.invoke(main, ["render", "sample3", "--seed", "5"])

        assert first.output == second.output

    def test_output_file(self, runner, tmp_path):
        path = tmp_path / "sample.svg"

        result = runner.invoke(main, ["render", "sample2", "-o", str(path)])

        assert result.exit_code == 0
        assert path.read_text().startswith("<svg")
        assert f"Wrote {path}" in result.output
