"""Domain layer — pure types and value objects, no I/O."""
