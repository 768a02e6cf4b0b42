"""Narrative insight context: answer aggregation and readiness gating.

Deterministic -- no LLM calls.
"""
