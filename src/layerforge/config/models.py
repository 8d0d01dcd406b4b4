"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, layerforge.toml only contains
overrides. A fresh registry needs no config file at all. Unknown sections
and keys are rejected rather than ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class RegistryConfig(BaseModel):
    """[registry] section."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str = "traits"


class CatalogConfig(BaseModel):
    """[catalog] section — variant paging inside ``category`` listings."""

    model_config = {"frozen": True, "extra": "forbid"}

    default_limit: int = Field(default=30, ge=0)
    art_limit: int = Field(default=5, ge=0)
    max_limit: int = Field(default=100, ge=1)

    @model_validator(mode="after")
    def _defaults_within_max(self) -> CatalogConfig:
        if max(self.default_limit, self.art_limit) > self.max_limit:
            msg = "catalog default_limit and art_limit must not exceed max_limit"
            raise ValueError(msg)
        return self


class DependenciesConfig(BaseModel):
    """[dependencies] section — dependency listing pages."""

    model_config = {"frozen": True, "extra": "forbid"}

    default_limit: int = Field(default=100, ge=0)
    max_limit: int = Field(default=1000, ge=1, le=0xFFFF)


class SkullConfig(BaseModel):
    """[skull] section — names of the skull-type sentinel layers.

    Used only while no sentinels have been set explicitly.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    eye_category: str = "Eye Type"
    cyclops_variant: str = "EyeType.Cyclops"
    jaw_category: str = "Jaw Type"
    jawless_variant: str = "None"


class LayerforgeConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True, "extra": "forbid"}

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    dependencies: DependenciesConfig = Field(default_factory=DependenciesConfig)
    skull: SkullConfig = Field(default_factory=SkullConfig)
