# Ingestion helpers for the prompt store.
