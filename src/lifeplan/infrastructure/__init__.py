"""Infrastructure layer: SQL persistence adapter and storage-error mapping."""
