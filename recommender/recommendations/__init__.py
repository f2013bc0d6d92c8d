"""
Recommendation engine.

Responsibilities:
- Accept user selections (preferences, features, single/multiple mode).
- Score every catalog product by how many of its own entries match.
- Drop non-matches and rank the rest deterministically.
- Attach rankings and stats, and apply display filters for the API.
"""
