"""Totem catalog API: product management backend for self-service kiosks."""

__version__ = "1.0.0"
