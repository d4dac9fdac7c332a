"""
Taste-graph (Qloo) integration.

Responsibilities:
- Query the search, recommendations and insights endpoints.
- Try alternative insight query shapes in order until one returns places.
- Cache GET responses for a few minutes.
- Reduce raw insight entities to a compact cultural-signal summary.
"""
