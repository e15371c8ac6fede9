"""Application layer: use cases composed from domain types and ports."""
