"""Project scoring & eligibility engine.

Pre-submission validation, integrity scoring with risk tiering, and
market price advice for carbon projects.

Deterministic — no LLM calls.
"""
