"""Record store adapters."""

from payroll_core.store.record_store import RecordQuery, RecordStore

__all__ = ["RecordStore", "RecordQuery"]
