"""Tests for the obsgraph CLI commands."""

import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from obsgraph._cli.main import app

runner = CliRunner()

PIPELINE_TOML = """
[nodes.ticks]
operator = "interval"

[nodes.clicks]
operator = "events"

[nodes.merged]
operator = "merge"

[[edges]]
source = "clicks"
target = "merged"
index = 1

[[edges]]
source = "ticks"
target = "merged"
index = 0
"""

CYCLIC_TOML = """
[nodes.a]
[nodes.b]

[[edges]]
source = "a"
target = "b"

[[edges]]
source = "b"
target = "a"
"""


@pytest.fixture
def pipeline(tmp_path: Path) -> Path:
    path = tmp_path / "pipeline.toml"
    path.write_text(PIPELINE_TOML)
    return path


@pytest.fixture
def cyclic(tmp_path: Path) -> Path:
    path = tmp_path / "cyclic.toml"
    path.write_text(CYCLIC_TOML)
    return path


class TestCheckCommand:
    """Tests for `obsgraph check`."""

    def test_valid_graph(self, pipeline: Path) -> None:
        result = runner.invoke(app, ["check", str(pipeline)])

        assert result.exit_code == 0
        assert "Graph is valid" in result.output

    def test_cyclic_graph(self, cyclic: Path) -> None:
        result = runner.invoke(app, ["check", str(cyclic)])

        assert result.exit_code == 1
        assert "Cycle detected" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["check", str(tmp_path / "missing.toml")])

        assert result.exit_code == 1

    def test_uses_configured_graph(
        self,
        tmp_path: Path,
        pipeline: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        (tmp_path / "pyproject.toml").write_text(f'[tool.obsgraph]\ngraph = "{pipeline.name}"\n')
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 0

    def test_no_graph_configured(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'demo'\n")
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["check"])

        assert result.exit_code == 1
        assert "No graph file given" in result.output


class TestOrderCommand:
    """Tests for `obsgraph order`."""

    def test_prints_plan(self, pipeline: Path) -> None:
        result = runner.invoke(app, ["order", str(pipeline)])

        assert result.exit_code == 0
        assert "merged" in result.stdout
        assert "ticks, clicks" in result.stdout

    def test_exports_plan(self, tmp_path: Path, pipeline: Path) -> None:
        output = tmp_path / "plan.toml"

        result = runner.invoke(app, ["order", str(pipeline), "-o", str(output)])

        assert result.exit_code == 0
        with output.open("rb") as f:
            data = tomllib.load(f)
        assert [node["id"] for node in data["nodes"]] == ["ticks", "clicks", "merged"]

    def test_export_of_json_null_fails_cleanly(self, tmp_path: Path) -> None:
        graph = tmp_path / "pipeline.json"
        graph.write_text('{"nodes": {"a": {"x": null}}}')
        output = tmp_path / "plan.toml"

        result = runner.invoke(app, ["order", str(graph), "-o", str(output)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Cannot write plan" in result.output
        assert not output.exists()

    def test_unwritable_output(self, tmp_path: Path, pipeline: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        result = runner.invoke(app, ["order", str(pipeline), "-o", str(blocker / "plan.toml")])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)

    def test_cyclic_graph(self, cyclic: Path) -> None:
        result = runner.invoke(app, ["order", str(cyclic)])

        assert result.exit_code == 1
        assert "Cycle detected" in result.output


class TestTreeCommand:
    """Tests for `obsgraph tree`."""

    def test_shows_sources(self, pipeline: Path) -> None:
        result = runner.invoke(app, ["tree", "merged", str(pipeline)])

        assert result.exit_code == 0
        assert result.stdout.index("ticks") < result.stdout.index("clicks")

    def test_unknown_node(self, pipeline: Path) -> None:
        result = runner.invoke(app, ["tree", "nope", str(pipeline)])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_cyclic_graph(self, cyclic: Path) -> None:
        result = runner.invoke(app, ["tree", "a", str(cyclic)])

        assert result.exit_code == 1
