from survey.aggregate_store import AggregateStore, JsonFileStorage, MemoryStorage
from survey.scoring_engine import SurveyResult, compute_scores, determine_winner, score_survey
from survey.session import InvalidTransitionError, SurveySession, SurveyState
