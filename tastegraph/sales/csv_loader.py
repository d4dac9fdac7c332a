from __future__ import annotations

import io

import pandas as pd
from pydantic import ValidationError

from ..gaps.models import SalesRecord

SKU_COLUMNS = ["sku_id", "SKU", "sku"]
TAGS_COLUMNS = ["tags"]
QTY_COLUMNS = ["qty", "quantity"]
MARGIN_COLUMNS = ["margin"]
DEFAULT_MARGIN = 1.0


class SalesParseError(ValueError):
    """Raised when an uploaded sales CSV cannot be turned into records."""


def _first_present(df: pd.DataFrame, columns: list[str]) -> str | None:
    for col in columns:
        if col in df.columns:
            return col
    return None


def _to_float(raw: str, field: str, line: int) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise SalesParseError(f"Row {line}: {field} {raw!r} is not a number") from None


def parse_sales_csv(text: str) -> list[SalesRecord]:
    """
    Parse CSV text into sales records.

    The header row must provide a SKU column, ``tags`` (comma separated
    inside one cell) and a quantity column; ``margin`` is optional and
    defaults to 1.0. Any malformed row fails the whole upload.
    """
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError:
        raise SalesParseError("CSV file is empty") from None
    except pd.errors.ParserError as exc:
        raise SalesParseError(f"Could not read CSV: {exc}") from exc

    df.columns = [str(c).strip() for c in df.columns]

    col_sku = _first_present(df, SKU_COLUMNS)
    col_tags = _first_present(df, TAGS_COLUMNS)
    col_qty = _first_present(df, QTY_COLUMNS)
    col_margin = _first_present(df, MARGIN_COLUMNS)

    missing = [
        name
        for name, col in (("sku_id", col_sku), ("tags", col_tags), ("qty", col_qty))
        if col is None
    ]
    if missing:
        raise SalesParseError(f"CSV is missing required column(s): {', '.join(missing)}")

    if df.empty:
        raise SalesParseError("CSV contains no sales rows")

    records: list[SalesRecord] = []
    # Line 1 is the header.
    for line, row in enumerate(df.to_dict("records"), start=2):
        qty = _to_float(row[col_qty], "qty", line)
        raw_margin = row[col_margin].strip() if col_margin else ""
        margin = _to_float(raw_margin, "margin", line) if raw_margin else DEFAULT_MARGIN

        try:
            records.append(SalesRecord(
                sku_id=row[col_sku],
                tags=row[col_tags].split(","),
                qty=qty,
                margin=margin,
            ))
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(p) for p in first["loc"])
            raise SalesParseError(f"Row {line}: {field}: {first['msg']}") from exc

    return records
