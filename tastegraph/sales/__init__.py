"""
Sales data input.

Responsibilities:
- Parse an uploaded sales CSV into validated sales records.
- Accept the common header spellings (sku_id / SKU / sku, qty / quantity).
- Reject the whole upload on the first bad row.
"""
