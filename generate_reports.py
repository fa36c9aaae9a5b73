import logging
import os

import pandas as pd
from tqdm import tqdm

# Import internal modules
from survey.aggregate_store import AggregateStore, JsonFileStorage
from survey.dashboard import summarize
from survey.data_loader import load_from_csv, preprocess_data, row_answers
from survey.report_builder import build_reports
from survey.scoring_engine import score_survey
from survey.section_writer import compile_dashboard_report
from survey.visualizer import create_dashboard_visuals

from config import CSV_PATH, LOG_LEVEL, REPORT_PATH, STORAGE_DIR, STORAGE_KEY


def score_responses(df: pd.DataFrame, store: AggregateStore) -> pd.DataFrame:
    """Score every respondent, then record each primary persona in ``store``.

    Nothing is recorded unless every row scores.
    """
    rows, primaries = [], []
    for _, row in tqdm(df.iterrows(), total=df.shape[0], desc="Scoring Responses", ncols=90):
        try:
            result = score_survey(row_answers(row))
        except ValueError as e:
            raise ValueError(f"Respondent {row['respondent_id']}: {e}") from e
        primaries.append(result.primary)
        rows.append({
            "respondent_id": str(row["respondent_id"]),
            "primary": result.primary,
            "hybrid": " & ".join(result.tied) if result.is_hybrid else "",
            **result.scores,
        })
    for persona in primaries:
        store.increment(persona)
    return pd.DataFrame(rows)


def generate_all_reports(csv_path: str = CSV_PATH, report_path: str = REPORT_PATH, storage_dir: str = STORAGE_DIR):
    """Main batch generation function."""

    # Ensure input file exists
    if not os.path.exists(csv_path):
        print(f"❌ Input file not found: {csv_path}")
        return None

    os.makedirs(report_path, exist_ok=True)

    df = preprocess_data(load_from_csv(csv_path))
    print(f"🧠 Loaded {len(df)} survey responses from {csv_path}\n")

    store = AggregateStore(JsonFileStorage(storage_dir), key=STORAGE_KEY)
    results_df = score_responses(df, store)
    results_path = os.path.join(report_path, "results.csv")
    results_df.to_csv(results_path, index=False, encoding="utf-8")

    summary = summarize(store.snapshot())
    text_report = compile_dashboard_report(summary)
    visuals = create_dashboard_visuals(summary)
    pdf_path, txt_path = build_reports(text_report, visuals, name="dashboard", report_path=report_path)

    print(f"\n✅ Scored {len(results_df)} responses, {summary.total_responses} total on record.")
    print(f"📁 Saved in: {os.path.abspath(report_path)}")
    return results_path, pdf_path, txt_path


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    generate_all_reports()
