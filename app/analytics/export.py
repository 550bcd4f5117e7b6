from __future__ import annotations

from datetime import date
from typing import Optional

import pandas as pd

from analytics.aggregation import donor_names


DEMOGRAPHICS_COLUMNS = ["Date", "Donor Name", "Email", "Amount", "State", "City", "Occupation", "Employer"]

_SOURCE_COLUMNS = {
    "Date": "transaction_date",
    "Email": "donor_email",
    "Amount": "amount",
    "State": "state",
    "City": "city",
    "Occupation": "occupation",
    "Employer": "employer",
}


def demographics_export(df: pd.DataFrame) -> pd.DataFrame:
    """Donor rows in the export layout; missing values become empty strings."""
    out = pd.DataFrame(index=df.index)
    for label in DEMOGRAPHICS_COLUMNS:
        if label == "Donor Name":
            out[label] = donor_names(df).replace("Anonymous", "") if len(df) else pd.Series(dtype="object")
            continue
        src = _SOURCE_COLUMNS[label]
        out[label] = df[src] if src in df.columns else None
    return out[DEMOGRAPHICS_COLUMNS].fillna("").reset_index(drop=True)


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    # pandas quotes fields containing commas, quotes or newlines
    return df.to_csv(index=False).encode("utf-8")


def export_filename(prefix: str, today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{prefix}-{today.isoformat()}.csv"
