"""Tests for the command line interface."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from prompts_web_viewer.cli import main


@pytest.fixture
def root(tmp_path: Path) -> Path:
    """Create a corpus for the CLI.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        Path to the corpus root.
    """
    root = tmp_path / "corpus"
    (root / "testing").mkdir(parents=True)
    (root / "notes").mkdir()
    (root / "README.md").write_text("# Welcome\n")
    (root / "testing" / "unit.md").write_text("# Unit\n\nassert docker works\n")
    (root / "notes" / "scratch.md").write_text("# Scratch\n")
    return root


def test_build_writes_snapshot(root: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the build command."""
    output = tmp_path / "dist"

    assert main(["--root", str(root), "build", str(output)]) == 0

    assert "Wrote 3 records" in capsys.readouterr().out
    record = json.loads((output / "content" / "testing" / "unit.md.json").read_text())
    assert record["title"] == "Unit"


def test_build_with_allow_list_policy(root: Path, tmp_path: Path) -> None:
    """Test that the allow-list policy leaves out unlisted root directories."""
    output = tmp_path / "dist"

    assert main(["--root", str(root), "build", str(output), "--policy", "allow-list"]) == 0

    assert not (output / "content" / "notes").exists()
    assert (output / "content" / "testing" / "unit.md.json").is_file()


def test_search_prints_results(root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the search command."""
    assert main(["--root", str(root), "search", "docker"]) == 0

    out = capsys.readouterr().out
    assert "Unit (testing/unit.md)" in out
    assert "3: assert docker works" in out


def test_search_no_results(root: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test the search command without hits."""
    assert main(["--root", str(root), "search", "kubernetes"]) == 0
    assert "No results found" in capsys.readouterr().out


def test_missing_root_fails(tmp_path: Path) -> None:
    """Test that startup failure exits non-zero."""
    assert main(["--root", str(tmp_path / "missing"), "search", "x"]) == 1


def test_serve_invalid_snapshot_fails(tmp_path: Path) -> None:
    """Test that serving a directory without a snapshot exits non-zero."""
    assert main(["serve", "--snapshot", str(tmp_path)]) == 1


def test_serve_runs_app(root: Path) -> None:
    """Test that serve wires the app without watching."""
    with patch("flask.Flask.run") as run:
        assert main(["--root", str(root), "serve", "--no-watch", "--port", "5055"]) == 0

    run.assert_called_once_with(host="127.0.0.1", port=5055, threaded=False)
