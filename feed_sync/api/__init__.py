"""HTTP API for triggering syncs and reading the event log."""
