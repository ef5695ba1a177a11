"""Parsing, storage and ingestion of P2000 messages."""
