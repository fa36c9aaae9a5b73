"""One respondent's pass through the questionnaire.

The session owns the answer sheet and the current result; the aggregate store
is injected so it can be swapped for an in-memory fake.
"""
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from config import LIKERT_MAX, LIKERT_MIN
from survey.dashboard import AggregateSummary, summarize
from survey.questions import QUESTIONS, Question
from survey.scoring_engine import SurveyResult, score_survey

logger = logging.getLogger(__name__)


class SurveyState(Enum):
    ANSWERING = "answering"
    COMPLETED = "completed"
    VIEWING_AGGREGATE = "viewing_aggregate"


class InvalidTransitionError(RuntimeError):
    pass


class SurveySession:
    def __init__(self, store):
        self.store = store
        self.answers: List[Optional[int]] = [None] * len(QUESTIONS)
        self.current_index = 0
        self.state = SurveyState.ANSWERING
        self.result: Optional[SurveyResult] = None

    def _require(self, *states: SurveyState) -> None:
        if self.state not in states:
            allowed = ", ".join(s.value for s in states)
            raise InvalidTransitionError(f"Action not allowed in state {self.state.value!r} (needs {allowed})")

    def submit_answer(self, question_index: int, value: int) -> SurveyState:
        self._require(SurveyState.ANSWERING)
        if question_index != self.current_index:
            raise InvalidTransitionError(
                f"Expected answer for question {self.current_index}, got {question_index}"
            )
        if not LIKERT_MIN <= value <= LIKERT_MAX:
            raise ValueError(f"Likert value must be in [{LIKERT_MIN}, {LIKERT_MAX}], got {value!r}")

        self.answers[question_index] = value
        if self.current_index < len(QUESTIONS) - 1:
            self.current_index += 1
        else:
            self.result = score_survey(self.answers, store=self.store)
            self.state = SurveyState.COMPLETED
            logger.info(f"Survey completed: primary={self.result.primary} hybrid={self.result.is_hybrid}")
        return self.state

    def current_question(self) -> Optional[Tuple[int, Question]]:
        if self.state is not SurveyState.ANSWERING:
            return None
        return self.current_index, QUESTIONS[self.current_index]

    def progress(self) -> float:
        if self.state is not SurveyState.ANSWERING:
            return 1.0
        return (self.current_index + 1) / len(QUESTIONS)

    def get_result(self) -> Optional[SurveyResult]:
        return self.result

    def get_aggregate_snapshot(self) -> Dict[str, int]:
        return self.store.snapshot()

    def view_dashboard(self) -> AggregateSummary:
        self._require(SurveyState.COMPLETED, SurveyState.VIEWING_AGGREGATE)
        self.state = SurveyState.VIEWING_AGGREGATE
        return summarize(self.store.snapshot())

    def reset_survey(self) -> Tuple[int, Question]:
        self._require(SurveyState.COMPLETED, SurveyState.VIEWING_AGGREGATE)
        self.answers = [None] * len(QUESTIONS)
        self.current_index = 0
        self.result = None
        self.state = SurveyState.ANSWERING
        return self.current_index, QUESTIONS[0]

    def clear_aggregate(self, confirm: Callable[[], bool]) -> bool:
        self._require(SurveyState.COMPLETED)
        if not confirm():
            return False
        self.store.clear()
        self.reset_survey()
        return True
