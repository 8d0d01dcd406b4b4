"""Fixtures for CLI command tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from layerforge.cli import cli
from tests.conftest import SAMPLE_CATEGORIES


@pytest.fixture
def seeded_cli(cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    """CliRunner in an isolated root whose database holds the sample collection."""
    monkeypatch.chdir(tmp_path)
    for name, skip, variants in SAMPLE_CATEGORIES:
        args = ["category", "add", name]
        if skip:
            args.append("--skip")
        for variant in variants:
            args.extend(["--variant", variant])
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0, result.output
    return cli_runner
