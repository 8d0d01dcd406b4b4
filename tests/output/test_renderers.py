"""Tests for operation-specific Rich renderers."""

from layerforge.output.renderers import layer_label, render_quiet, render_result
from layerforge.services.result import ServiceError, ServiceResult


def _category_result() -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="category",
        data={
            "category_count": 2,
            "index": 1,
            "name": "Eye Type",
            "skip": False,
            "variant_count": 2,
            "variants": [
                {
                    "index": 0,
                    "name": "EyeType.Normal",
                    "display_name": "Normal",
                    "art": None,
                    "includes": [],
                },
                {
                    "index": 1,
                    "name": "EyeType.Cyclops",
                    "display_name": "Cyclops",
                    "art": None,
                    "includes": [{"category": "Jaw Type", "variant": "None"}],
                },
            ],
        },
    )


class TestLayerLabel:
    def test_names(self) -> None:
        assert layer_label({"category": "Nose", "variant": "Nose.None"}) == "Nose:Nose.None"

    def test_indices(self) -> None:
        assert layer_label({"category": 2, "variant": 0}) == "2:0"


class TestRenderResult:
    def test_category_table(self) -> None:
        output = render_result(_category_result())
        assert "[1] Eye Type" in output
        assert "EyeType.Cyclops" in output
        assert "Jaw Type:None" in output
        assert "2 of 2 variants" in output

    def test_dependencies_table(self) -> None:
        result = ServiceResult(
            ok=True,
            op="dependencies",
            data={
                "count": 3,
                "dependencies": [
                    {
                        "id": {"category": "Eye Type", "variant": "EyeType.Cyclops"},
                        "correlated": [{"category": "Jaw Type", "variant": "None"}],
                        "includes": [{"category": "Jaw Type", "variant": "None"}],
                    }
                ],
            },
        )
        output = render_result(result)
        assert "Eye Type:EyeType.Cyclops" in output
        assert "1 of 3 dependencies" in output

    def test_skull_layers(self) -> None:
        result = ServiceResult(
            ok=True,
            op="skull_type_layer_ids",
            data={"cyclops": {"category": 1, "variant": 1}, "jawless": {"category": 2, "variant": 0}},
        )
        output = render_result(result)
        assert "cyclops: 1:1" in output
        assert "jawless: 2:0" in output

    def test_unknown_op_falls_back(self) -> None:
        output = render_result(ServiceResult(ok=True, op="mystery", data={"answer": 42}))
        assert "mystery" in output
        assert "answer: 42" in output

    def test_error_with_detail(self) -> None:
        result = ServiceResult(
            ok=False,
            op="add_variants",
            error=ServiceError(code="OVERFLOW", message="Too many", detail={"limit": 256}),
        )
        output = render_result(result, verbose=True)
        assert "ERROR" in output
        assert "OVERFLOW" in output
        assert "limit: 256" in output

    def test_verbose_telemetry(self) -> None:
        result = ServiceResult(
            ok=True,
            op="transmute",
            data={"composition": [0]},
            meta={"telemetry": {"name": "ComposeService.transmute", "duration_ms": 1.5}},
        )
        output = render_result(result, verbose=True)
        assert "ComposeService.transmute" in output


class TestRenderQuiet:
    def test_category_names(self) -> None:
        assert render_quiet(_category_result()) == "EyeType.Normal\nEyeType.Cyclops"

    def test_skull_type(self) -> None:
        result = ServiceResult(
            ok=True, op="skull_type", data={"is_cyclops": True, "is_jawless": False}
        )
        assert render_quiet(result) == "true,false"

    def test_error_line(self) -> None:
        result = ServiceResult(
            ok=False, op="variant", error=ServiceError(code="NOT_FOUND", message="No such variant")
        )
        assert render_quiet(result) == "ERROR: variant [NOT_FOUND] No such variant"


class TestErrorLine:
    def test_code_and_message(self) -> None:
        result = ServiceResult(
            ok=False,
            op="transmute",
            error=ServiceError(code="CONFLICTING_DEPENDENCY", message="Category Jaw Type clash"),
        )
        assert render_result(result) == (
            "ERROR  transmute [CONFLICTING_DEPENDENCY]: Category Jaw Type clash"
        )

    def test_detail_hidden_unless_verbose(self) -> None:
        result = ServiceResult(
            ok=False,
            op="add_variants",
            error=ServiceError(code="OVERFLOW", message="Too many", detail={"limit": 256}),
        )
        assert "limit" not in render_result(result)


class TestSkipTitle:
    def test_skip_marker(self) -> None:
        base = _category_result()
        result = base.model_copy(update={"data": {**base.data, "skip": True}})
        assert "[1] Eye Type (skip)" in render_result(result)
