"""Test data: the cross-test temp store, generated names, credentials, data files."""

from julius_e2e.testdata.store import TempStore, get_temp_store

__all__ = ["TempStore", "get_temp_store"]
