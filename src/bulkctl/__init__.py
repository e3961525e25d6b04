"""bulkctl — uniform per-record results for bulk record-store writes."""

__version__ = "0.1.0"
