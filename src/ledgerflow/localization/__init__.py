"""Localization of display labels."""
from .labels import Localizer

__all__ = ["Localizer"]
