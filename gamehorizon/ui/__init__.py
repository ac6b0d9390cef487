"""Browser-facing collection UI backed by the record store."""
