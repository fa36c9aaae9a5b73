import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from config import LIKERT_MAX, LIKERT_MIN
from survey.questions import PERSONA_NAMES, PERSONA_WEIGHTS, PERSONAS, QUESTIONS

logger = logging.getLogger(__name__)

MAX_PERSONA_SIZE = max(len(p) for p in PERSONAS.values())
BAR_SCALE = LIKERT_MAX * MAX_PERSONA_SIZE


@dataclass
class SurveyResult:
    primary: str
    scores: Dict[str, int]
    tied: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_hybrid(self) -> bool:
        return len(self.tied) > 1

    @property
    def max_score(self) -> int:
        return self.scores[self.primary]

    def ranked_scores(self) -> List[Tuple[str, int]]:
        # Stable sort keeps declaration order among equal scores.
        return sorted(self.scores.items(), key=lambda kv: -kv[1])

    def to_dict(self) -> dict:
        return {
            "primary": self.primary,
            "hybrid": list(self.tied) if self.is_hybrid else None,
            "scores": dict(self.scores),
        }


def _answer_vector(answers: Sequence[Optional[int]]) -> np.ndarray:
    if len(answers) != len(QUESTIONS):
        raise ValueError(f"Expected {len(QUESTIONS)} answers, got {len(answers)}")
    vec = np.zeros(len(QUESTIONS), dtype=int)
    for i, a in enumerate(answers):
        if a is None:
            continue  # unanswered contributes 0
        if a != int(a) or not LIKERT_MIN <= a <= LIKERT_MAX:
            raise ValueError(f"Answer {i + 1} must be in [{LIKERT_MIN}, {LIKERT_MAX}], got {a!r}")
        vec[i] = int(a)
    return vec


def compute_scores(answers: Sequence[Optional[int]]) -> Dict[str, int]:
    """Sum the answers at each persona's question positions.

    ``answers`` is positional, one entry per question. An unanswered question
    (``None``) counts as 0 for every persona that references it.
    """
    totals = PERSONA_WEIGHTS @ _answer_vector(answers)
    return {name: int(v) for name, v in zip(PERSONA_NAMES, totals)}


def determine_winner(scores: Dict[str, int], store=None) -> SurveyResult:
    """Resolve the winning persona(s) and record the primary in ``store``.

    Personas sharing the top score are listed in declaration order; the first
    is the primary. Only the primary's aggregate count is incremented, even
    for a hybrid result.
    """
    missing = [p for p in PERSONA_NAMES if p not in scores]
    if missing:
        raise KeyError(f"Scores missing personas: {missing}")
    ordered = [(p, scores[p]) for p in PERSONA_NAMES]
    top = max(v for _, v in ordered)
    winners = [p for p, v in ordered if v == top]

    if store is not None:
        store.increment(winners[0])

    result = SurveyResult(
        primary=winners[0],
        scores=dict(ordered),
        tied=tuple(winners) if len(winners) > 1 else (),
    )
    logger.debug("Survey winner %s (score %d, tied=%s)", result.primary, top, list(result.tied))
    return result


def score_survey(answers: Sequence[Optional[int]], store=None) -> SurveyResult:
    return determine_winner(compute_scores(answers), store=store)


def persona_ranges() -> Dict[str, Tuple[int, int]]:
    return {name: (LIKERT_MIN * len(pos), LIKERT_MAX * len(pos)) for name, pos in PERSONAS.items()}


def result_bar_fraction(score: int) -> float:
    return score / BAR_SCALE
