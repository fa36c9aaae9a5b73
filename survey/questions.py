from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Tuple

import numpy as np

from config import LIKERT_MAX, LIKERT_MIN


@dataclass(frozen=True)
class Question:
    position: int
    text: str


LIKERT_OPTIONS: Tuple[Tuple[int, str], ...] = (
    (1, "Strongly Disagree"),
    (2, "Disagree"),
    (3, "Somewhat Disagree"),
    (4, "Neutral"),
    (5, "Somewhat Agree"),
    (6, "Agree"),
    (7, "Strongly Agree"),
)

_QUESTION_TEXT = [
    "Traditional practices and rituals are an important part of my life.",
    "I am interested in understanding the reasoning or philosophy behind spiritual or religious practices.",
    "Astrology or planetary influences play a role in how I approach life decisions.",
    "Participating in cultural festivals and customs is meaningful to me.",
    "Spiritual practices for personal well-being, such as meditation or mindfulness, are important to me.",
    "Religious rituals or practices provide value in my daily life, whether adapted or traditional.",
    "I approach astrology with an interest in rational or evidence-based perspectives.",
    "I am drawn to exploring the cultural or historical background of traditions.",
    "Spiritual practices help me find inner peace or a sense of connection.",
    "I appreciate cultural customs but prefer ways to celebrate them that fit with modern life.",
    "I enjoy astrology as a source of insight or guidance, though I don't always follow it strictly.",
    "I value religious practices most when they are preserved in their original forms.",
]

QUESTIONS: Tuple[Question, ...] = tuple(
    Question(position=i, text=t) for i, t in enumerate(_QUESTION_TEXT, start=1)
)

# Declaration order doubles as the tie-break order.
PERSONAS: "MappingProxyType[str, Tuple[int, ...]]" = MappingProxyType({
    "Traditional Spiritual": (1, 9),
    "Traditional Religious": (1, 6, 12),
    "Traditional Astrologer": (3,),
    "Traditional Cultural": (4, 8),
    "Scientific Spiritual": (2, 5),
    "Scientific Religious": (2,),
    "Scientific Astrologer": (3, 7),
    "Scientific Cultural": (8,),
    "Practical Spiritual": (5, 9),
    "Practical Religious": (6,),
    "Practical Astrologer": (3, 11),
    "Practical Cultural": (4, 10),
})
PERSONA_NAMES: List[str] = list(PERSONAS)


def _build_weight_matrix(personas, n_questions: int) -> np.ndarray:
    W = np.zeros((len(personas), n_questions), dtype=int)
    for row, positions in enumerate(personas.values()):
        for pos in positions:
            if not 1 <= pos <= n_questions:
                raise ValueError(f"Question position {pos} out of range for 1..{n_questions}")
            W[row, pos - 1] = 1
    W.setflags(write=False)
    return W


PERSONA_WEIGHTS = _build_weight_matrix(PERSONAS, len(QUESTIONS))


def option_label(value: int) -> str:
    if not LIKERT_MIN <= value <= LIKERT_MAX:
        raise ValueError(f"Likert value must be in [{LIKERT_MIN}, {LIKERT_MAX}], got {value!r}")
    return LIKERT_OPTIONS[value - LIKERT_MIN][1]


def persona_sizes() -> Dict[str, int]:
    return {name: len(positions) for name, positions in PERSONAS.items()}
