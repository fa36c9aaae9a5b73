# config.py
import os

# Logging
LOG_LEVEL = os.getenv("SURVEY_LOG_LEVEL", "INFO")

# File paths
STORAGE_DIR = os.getenv("SURVEY_STORAGE_DIR", "data/")
REPORT_PATH = os.getenv("SURVEY_REPORT_PATH", "reports/")
CSV_PATH = os.getenv("SURVEY_RESPONSES_CSV", "responses.csv")

# Persisted aggregate entry
STORAGE_KEY = os.getenv("SURVEY_STORAGE_KEY", "surveyAggregateData")

# Survey metadata
PERSONA_COUNT = 12
QUESTION_COUNT = 12
LIKERT_MIN = 1
LIKERT_MAX = 7
