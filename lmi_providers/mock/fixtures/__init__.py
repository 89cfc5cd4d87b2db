"""Fixture resources for the mock invoker."""
