"""Tests for RegistryService."""

from layerforge.domain.layers import StoredLayerId, VariantInfo, VariantModification
from layerforge.infrastructure.store import TraitStore
from layerforge.services.registry import RegistryService
from tests.conftest import category_info


class TestAddCategories:
    def test_reports_indices(self, store: TraitStore) -> None:
        svc = RegistryService(store)
        result = svc.add_categories([category_info("background", ["red", "blue"])])
        assert result.ok
        result = svc.add_categories([category_info("eyes"), category_info("mouth")])
        assert result.data["count"] == 3
        assert result.data["added"] == [{"index": 1, "name": "eyes"}, {"index": 2, "name": "mouth"}]

    def test_duplicate_leaves_state(self, seeded_store: TraitStore) -> None:
        result = RegistryService(seeded_store).add_categories(
            [category_info("Hat"), category_info("Nose")]
        )
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "DUPLICATE"
        assert seeded_store.registry.category_count == 5


class TestAddVariants:
    def test_appends(self, seeded_store: TraitStore) -> None:
        result = RegistryService(seeded_store).add_variants(
            "Mouth", [VariantInfo(name="Mouth.Grin", display_name="Grin")]
        )
        assert result.ok
        assert result.data["category_index"] == 4
        assert result.data["variant_count"] == 3
        assert result.data["added"] == [{"index": 2, "name": "Mouth.Grin"}]

    def test_overflow(self, seeded_store: TraitStore) -> None:
        variants = [VariantInfo(name=f"m{i}", display_name=str(i)) for i in range(255)]
        result = RegistryService(seeded_store).add_variants("Mouth", variants)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "OVERFLOW"
        assert seeded_store.registry.variant_counts()[4] == 2

    def test_unknown_category(self, seeded_store: TraitStore) -> None:
        result = RegistryService(seeded_store).add_variants(
            "Hat", [VariantInfo(name="Hat.Cap", display_name="Cap")]
        )
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"


class TestModifyCategory:
    def test_rename_and_skip(self, seeded_store: TraitStore) -> None:
        result = RegistryService(seeded_store).modify_category(
            "Background", new_name="Backdrop", new_skip=False
        )
        assert result.ok
        assert result.data == {"index": 0, "name": "Backdrop", "skip": False, "changed": True}
        assert result.warnings == []

    def test_unchanged_warns(self, seeded_store: TraitStore) -> None:
        result = RegistryService(seeded_store).modify_category("Background", new_skip=True)
        assert result.ok
        assert result.data["changed"] is False
        assert len(result.warnings) == 1

    def test_empty_rename_is_invalid_request(self, seeded_store: TraitStore) -> None:
        result = RegistryService(seeded_store).modify_category("Background", new_name="")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_REQUEST"
        assert seeded_store.registry.category_names[0] == "Background"


class TestModifyVariants:
    def test_modifies(self, seeded_store: TraitStore) -> None:
        mods = [
            VariantModification(
                name="Nose.Small",
                modified_variant=VariantInfo(name="Nose.Button", display_name="Button"),
            )
        ]
        result = RegistryService(seeded_store).modify_variants("Nose", mods)
        assert result.ok
        assert result.data == {"category": "Nose", "modified": 1}
        assert seeded_store.registry.variant(StoredLayerId(category=3, variant=0)).name == (
            "Nose.Button"
        )


class TestSetSkullTypeLayers:
    def test_sets(self, seeded_store: TraitStore) -> None:
        cyclops = StoredLayerId(category=1, variant=1)
        jawless = StoredLayerId(category=2, variant=1)
        result = RegistryService(seeded_store).set_skull_type_layers(cyclops, jawless)
        assert result.ok
        assert result.data == {
            "cyclops": {"category": 1, "variant": 1},
            "jawless": {"category": 2, "variant": 1},
        }
        assert seeded_store.state.sentinels is not None

    def test_unknown_layer_rejected(self, seeded_store: TraitStore) -> None:
        result = RegistryService(seeded_store).set_skull_type_layers(
            StoredLayerId(category=1, variant=1), StoredLayerId(category=9, variant=0)
        )
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"
        assert seeded_store.state.sentinels is None
