"""Per-section config schemas (no side effects / globals)."""
