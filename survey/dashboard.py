from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Tuple

import pandas as pd


def percentage(count: int, total: int) -> float:
    # Half up on the exact binary value, like toFixed(1) in the browser dashboard.
    share = Decimal(count / total * 100)
    return float(share.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass
class AggregateSummary:
    total_responses: int
    most_common: str
    unique_personas: int
    distribution: List[Tuple[str, int, float]]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.distribution, columns=["Persona", "Count", "Percentage"])


def distribution_frame(counts: Dict[str, int]) -> pd.DataFrame:
    df = pd.DataFrame({"Persona": list(counts.keys()), "Count": list(counts.values())}, columns=["Persona", "Count"])
    df["Count"] = df["Count"].astype(int)
    # mergesort is stable, so equal counts stay in first-win order
    df = df.sort_values("Count", ascending=False, kind="mergesort").reset_index(drop=True)
    total = int(df["Count"].sum())
    df["Percentage"] = [percentage(c, total) for c in df["Count"]] if total else 0.0
    return df


def summarize(counts: Dict[str, int]) -> AggregateSummary:
    df = distribution_frame(counts)
    rows = [(str(r.Persona), int(r.Count), float(r.Percentage)) for r in df.itertuples(index=False)]
    return AggregateSummary(
        total_responses=int(df["Count"].sum()),
        most_common=rows[0][0] if rows else "N/A",
        unique_personas=len(rows),
        distribution=rows,
    )
