"""Bundled provider catalog resources (``providers.yaml``).

Loaded through :func:`lmi_providers.registry.catalog_loader.load_catalog`.
"""
