"""Infrastructure layer: configuration, storage and ledger transactions."""
