"""Cohort aggregation, rank-change tracking and growth analytics (DETERMINISTIC).

Every function here is a pure computation over an immutable sequence of
survey responses plus a rank taxonomy snapshot. Nothing is persisted.
"""
