"""
Taste-gap analysis.

Responsibilities:
- Score how strongly a sales record's tags overlap with taste entities.
- Find taste signals that current inventory under-serves.
- Turn free-text product categories into weighted taste entities.
- Check a suggestion against static store-type and location rules.
"""
