"""Single-user task tracking: in-memory store, JSON persistence and CSV export."""
