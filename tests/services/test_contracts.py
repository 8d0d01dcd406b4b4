"""Tests for typed payload contracts."""

import pydantic
import pytest

from layerforge.domain.layers import LayerId, StoredDependency, StoredLayerId
from layerforge.services.contracts import (
    BulkExportData,
    CategoryData,
    SkullTypeLayerIdsData,
    VariantEntry,
)


class TestContracts:
    def test_category_dump_is_json_ready(self) -> None:
        data = CategoryData(
            category_count=1,
            index=0,
            name="Eye Type",
            skip=False,
            variant_count=1,
            variants=[
                VariantEntry(
                    index=0,
                    name="EyeType.Cyclops",
                    display_name="Cyclops",
                    includes=[LayerId(category="Jaw Type", variant="None")],
                )
            ],
        ).dump()
        assert data["variants"][0]["includes"] == [{"category": "Jaw Type", "variant": "None"}]
        assert data["variants"][0]["art"] is None

    def test_bulk_export_uses_indices(self) -> None:
        dep = StoredDependency(
            id=StoredLayerId(category=1, variant=1),
            correlated=[StoredLayerId(category=2, variant=1)],
        )
        data = BulkExportData(category_names=["a", "b", "c"], dependencies=[dep], skip=[]).dump()
        assert data["dependencies"][0]["id"] == {"category": 1, "variant": 1}

    def test_frozen(self) -> None:
        data = SkullTypeLayerIdsData(
            cyclops=StoredLayerId(category=1, variant=1),
            jawless=StoredLayerId(category=2, variant=1),
        )
        with pytest.raises(pydantic.ValidationError):
            data.cyclops = StoredLayerId(category=0, variant=0)  # type: ignore[misc]

    def test_missing_field_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            VariantEntry(index=0, name="x", display_name="x")  # type: ignore[call-arg]
