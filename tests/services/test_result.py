"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from layerforge.domain.errors import ErrorCode, NotFoundError
from layerforge.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="transmute", data={"composition": [0, 1]})
        assert result.ok is True
        assert result.op == "transmute"
        assert result.data == {"composition": [0, 1]}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="Category name: Hat does not exist")
        result = ServiceResult(ok=False, op="category", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert result.error.detail == {}

    def test_json_serialization(self) -> None:
        result = ServiceResult(
            ok=True,
            op="state",
            data={"category_count": 3},
            warnings=["w"],
        )
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["category_count"] == 3
        assert parsed["warnings"] == ["w"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="state")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_failure_requires_error(self) -> None:
        with pytest.raises(ValidationError, match="must carry an error"):
            ServiceResult(ok=False, op="state")

    def test_success_rejects_error(self) -> None:
        error = ServiceError(code="DUPLICATE", message="dup")
        with pytest.raises(ValidationError, match="cannot carry an error"):
            ServiceResult(ok=True, op="add_categories", error=error)


class TestServiceError:
    def test_from_exception(self) -> None:
        error = ServiceError.from_exception(NotFoundError("no Hat", category="Hat"))
        assert error.code is ErrorCode.NOT_FOUND
        assert error.message == "no Hat"
        assert error.detail == {"category": "Hat"}

    def test_unknown_code_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServiceError(code="TEAPOT", message="short and stout")

    def test_code_dumps_as_string(self) -> None:
        error = ServiceError(code="OVERFLOW", message="full")
        assert json.loads(error.model_dump_json())["code"] == "OVERFLOW"
