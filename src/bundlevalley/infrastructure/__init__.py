"""Infrastructure layer — SQLite persistence behind the bundle store."""
