"""Shared test fixtures for neurogame tests.

This package provides:
- Fake providers that record every invocation
- Sample task strings and stage outputs
"""

__all__ = [
    "fake_providers",
    "sample_data",
]
