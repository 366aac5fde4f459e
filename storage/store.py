from __future__ import annotations

"""Parquet-backed answer history using pandas + pyarrow.

Unit of data: one row per counted answer.
"""

from pathlib import Path

import pandas as pd
import pyarrow  # noqa: F401  (parquet engine)

from .schema import DTYPES, AnswerRow, DIAGRAM_KINDS, DIFFICULTIES


DATA_FILE = "answer_history.parquet"


def _empty_df() -> pd.DataFrame:
    dtypes = DTYPES.copy()
    df = pd.DataFrame({k: pd.Series(dtype=v) for k, v in dtypes.items()})
    return df


def init_store(data_dir: Path) -> None:
    """Ensure the data directory and an empty Parquet file with the right schema exist."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / DATA_FILE
    if not path.exists():
        _empty_df().to_parquet(path, engine="pyarrow", compression="zstd", index=False)


def validate_records(records: list[AnswerRow]) -> pd.DataFrame:
    """Validate AnswerRow-like records and return a DataFrame with proper dtypes."""
    if not isinstance(records, list):
        raise TypeError("records must be a list[AnswerRow]")
    rows = [r if isinstance(r, AnswerRow) else AnswerRow.model_validate(r) for r in records]
    if not rows:
        return _empty_df()
    df = pd.DataFrame([r.to_record() for r in rows])
    return _fix_dtypes(df)


def _fix_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    for col, dt in DTYPES.items():
        if col not in df.columns:
            df[col] = pd.NA
        df[col] = df[col].astype(dt)
    return df[list(DTYPES.keys())]


def append_answers(df_new: pd.DataFrame, data_path: Path) -> None:
    """Append rows to the history table.

    Reads existing, concatenates, fixes dtypes, removes exact duplicates and
    writes back with zstd compression.
    """
    data_path = Path(data_path)
    data_path.mkdir(parents=True, exist_ok=True)
    f = data_path / DATA_FILE
    if f.exists():
        df_old = _fix_dtypes(pd.read_parquet(f, engine="pyarrow"))
    else:
        df_old = _empty_df()
    df_new = _fix_dtypes(df_new.copy())
    if df_old.empty:
        combined = df_new
    else:
        combined = pd.concat([df_old, df_new], ignore_index=True)
    combined = _fix_dtypes(combined)
    combined = combined.drop_duplicates().reset_index(drop=True)  # exact duplicate rows only
    combined.to_parquet(f, engine="pyarrow", compression="zstd", index=False)


def load_all(data_path: Path) -> pd.DataFrame:
    """Load the full history with enforced dtypes, oldest answer first."""
    f = Path(data_path) / DATA_FILE
    if not f.exists():
        return _empty_df()
    df = _fix_dtypes(pd.read_parquet(f, engine="pyarrow"))
    return df.sort_values("answered_at", kind="stable").reset_index(drop=True)


def query_question(df: pd.DataFrame, question_id: int) -> pd.DataFrame:
    """All answers to one question, oldest first."""
    dff = df[df["question_id"].astype("Int64") == int(question_id)]
    return dff.sort_values("answered_at", kind="stable").reset_index(drop=True)


def query_slice(df: pd.DataFrame, *, difficulty: str | None = None, diagram_kind: str | None = None) -> pd.DataFrame:
    if difficulty is not None and difficulty not in DIFFICULTIES:
        raise ValueError(f"Unknown difficulty: {difficulty}")
    if diagram_kind is not None and diagram_kind not in DIAGRAM_KINDS:
        raise ValueError(f"Unknown diagram kind: {diagram_kind}")
    mask = pd.Series(True, index=df.index)
    if difficulty is not None:
        mask &= df["difficulty"].astype("string") == difficulty
    if diagram_kind is not None:
        mask &= df["diagram_kind"].astype("string") == diagram_kind
    return df[mask.fillna(False)].reset_index(drop=True)


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON) for quick inspection."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True, date_format="iso")


class AnswerHistory:
    """Append-only sink the session controller writes counted answers to."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir).expanduser()

    def append(self, row: AnswerRow) -> None:
        append_answers(validate_records([row]), self.data_dir)

    def load(self) -> pd.DataFrame:
        return load_all(self.data_dir)
