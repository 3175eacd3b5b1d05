"""
Domain repository interfaces

Contains abstract repository interfaces that define contracts for data access.
These follow the Repository pattern and Dependency Inversion principle.
"""

from .cart_repository import CartRepository
from .session_repository import SessionRepository

__all__ = [
    'CartRepository',
    'SessionRepository',
]
