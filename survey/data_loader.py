import os
from typing import List, Optional

import numpy as np
import pandas as pd

from survey.questions import QUESTIONS

ANSWER_COLUMNS = [f"q{q.position}" for q in QUESTIONS]


def load_from_csv(csv_path: str) -> pd.DataFrame:
    if not os.path.exists(csv_path):
        raise FileNotFoundError(f"CSV not found: {csv_path}")
    df = pd.read_csv(csv_path)
    return df


def preprocess_data(df: pd.DataFrame) -> pd.DataFrame:
    df = df.rename(columns={c: c.strip().lower() for c in df.columns})
    missing = [c for c in ANSWER_COLUMNS if c not in df.columns]
    if missing:
        raise KeyError(f"Responses CSV missing answer columns: {missing}")
    raw = df[ANSWER_COLUMNS].replace(r"^\s*$", np.nan, regex=True)
    numeric = raw.apply(pd.to_numeric, errors="coerce")
    bad = numeric.isna() & raw.notna()
    if bad.any().any():
        cells = [f"row {i + 1} {ANSWER_COLUMNS[j]}={raw.iat[i, j]!r}" for i, j in zip(*bad.to_numpy().nonzero())]
        raise ValueError(f"Non-numeric answers in responses CSV: {cells}")
    df[ANSWER_COLUMNS] = numeric
    if "respondent_id" not in df.columns:
        df.insert(0, "respondent_id", [f"respondent_{i + 1}" for i in range(len(df))])
    return df


def row_answers(row) -> List[Optional[int]]:
    # Blank cells are unanswered; fractional values are left for scoring to reject.
    answers = []
    for c in ANSWER_COLUMNS:
        v = row[c]
        if pd.isna(v):
            answers.append(None)
        else:
            answers.append(int(v) if float(v).is_integer() else float(v))
    return answers
