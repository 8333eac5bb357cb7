"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as databases,
external services, and frameworks.
"""

from yams.infrastructure import repositories

__all__ = ["repositories"]
