"""Literacy scoring: answer normalization, dimension scoring, overall score and rank.

Deterministic -- no I/O.
"""
