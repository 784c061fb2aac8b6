"""Snotra — Discord assistant that checks German phrases with an LLM."""

from snotra.config import __version__

__all__ = ["__version__"]
