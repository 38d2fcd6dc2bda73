# classification/io_excel.py
from pathlib import Path

import pandas as pd
from .mapping import MAP_IN2INTERNAL, ORDER_OUTCOLS

# Internal columns added when missing
_INTERNAL_REQUIRED = ["Document_Id", "Title", "Document_Text"]


def load_documents_table(file):
    """Read an .xlsx/.xls/.csv document table and map its columns."""
    suffix = Path(str(getattr(file, "name", file))).suffix.lower()
    if suffix == ".csv":
        df = pd.read_csv(file, dtype=str)
    else:
        df = pd.read_excel(file, dtype=str)

    cols = {}
    for k, v in MAP_IN2INTERNAL.items():
        if k in df.columns and v not in df.columns:
            cols[k] = v
    df = df.rename(columns=cols)

    for need in _INTERNAL_REQUIRED:
        if need not in df.columns:
            df[need] = None

    # Missing ids -> 1-based row number
    row_numbers = pd.Series([str(i + 1) for i in range(len(df))], index=df.index)
    df["Document_Id"] = df["Document_Id"].fillna(row_numbers)
    df["Document_Text"] = df["Document_Text"].fillna("")

    return df


def order_output(df):
    """Known result columns first (in ORDER_OUTCOLS order), the rest after."""
    first = [c for c in ORDER_OUTCOLS if c in df.columns]
    rest = [c for c in df.columns if c not in first]
    return df[first + rest]


def write_result(df, path="documents_classified.xlsx"):
    df = order_output(df)
    if str(path).lower().endswith(".csv"):
        df.to_csv(path, index=False)
    else:
        df.to_excel(path, index=False)
    return path
