"""
Value objects for domain modeling.

Value objects are immutable objects that represent descriptive
aspects of the domain with no conceptual identity.
"""

from .address import Address

__all__ = ["Address"]
