"""layerforge — registry and composition engine for generative trait layers."""

__version__ = "0.1.0"
