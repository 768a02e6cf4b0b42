"""Rank taxonomy: per-tenant five-tier rank definitions with a system default."""
