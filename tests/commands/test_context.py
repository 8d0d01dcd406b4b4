"""Tests for AppContext emission and store lifecycle."""

import json
from pathlib import Path

import pytest

from layerforge.commands._context import AppContext
from layerforge.config.settings import LayerforgeSettings
from layerforge.services.result import ServiceError, ServiceResult


def _app(tmp_path: Path, **flags: bool) -> AppContext:
    return AppContext(LayerforgeSettings.from_cli(root=tmp_path, **flags))


class TestEmit:
    def test_success_with_warning(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        result = ServiceResult(
            ok=True, op="remove_dependencies", data={"count": 0}, warnings=["w1"]
        )
        _app(tmp_path).emit(result)
        captured = capsys.readouterr()
        assert "remove_dependencies" in captured.out
        assert captured.err.strip() == "WARNING: w1"

    def test_json_keeps_warnings_in_payload(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        result = ServiceResult(ok=True, op="state", warnings=["w1"])
        _app(tmp_path, json_output=True).emit(result)
        captured = capsys.readouterr()
        assert json.loads(captured.out)["warnings"] == ["w1"]
        assert captured.err == ""

    def test_failure_exits_1(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        result = ServiceResult(
            ok=False, op="category", error=ServiceError(code="NOT_FOUND", message="no Hat")
        )
        with pytest.raises(SystemExit) as excinfo:
            _app(tmp_path).emit(result)
        assert excinfo.value.code == 1
        assert "no Hat" in capsys.readouterr().err


class TestLifecycle:
    def test_store_is_lazy(self, tmp_path: Path) -> None:
        app = _app(tmp_path)
        assert not (tmp_path / ".layerforge").exists()
        assert app.store is app.store
        assert (tmp_path / ".layerforge").is_dir()
        app.close()

    def test_close_resets(self, tmp_path: Path) -> None:
        app = _app(tmp_path)
        first = app.dispatcher
        app.close()
        assert app.dispatcher is not first
        app.close()

    def test_close_without_store(self, tmp_path: Path) -> None:
        _app(tmp_path).close()
        assert not (tmp_path / ".layerforge").exists()
