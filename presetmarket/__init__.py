"""Storefront for audio presets and preset packs."""

__version__ = "1.0.0"
