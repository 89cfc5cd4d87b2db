"""Mock invoker package exposing deterministic fixtures for tests."""

from .client import MockInvoker, load_fixture_catalog

__all__ = ["MockInvoker", "load_fixture_catalog"]
