"""Numerology map service: pillar calculation engine, interpretations and HTTP API."""

__version__ = "0.1.0"
