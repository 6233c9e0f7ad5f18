"""Concrete catalog providers and preference stores.

* :class:`InMemoryCatalogProvider` – deterministic double and fixture loader.
* :class:`HttpCatalogProvider` – remote lens database plus local camera file.
* :class:`InMemoryPreferenceStore` – process-local favorites/comparison storage.

The SQL-backed preference store lives in :mod:`lens_catalog.db.preferences_store`.
"""

from .http import HttpCatalogProvider
from .in_memory import InMemoryCatalogProvider, InMemoryPreferenceStore

__all__ = [
    "HttpCatalogProvider",
    "InMemoryCatalogProvider",
    "InMemoryPreferenceStore",
]
