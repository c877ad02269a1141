"""Desktop host window for development."""
