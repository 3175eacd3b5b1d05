"""
Domain value objects package

Contains immutable value objects that represent concepts in the business domain.
"""

from .coordinates import Coordinates

__all__ = ["Coordinates"]
