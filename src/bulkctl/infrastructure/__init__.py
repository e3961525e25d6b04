"""Infrastructure layer — the SQLite record store behind bulk writes."""
