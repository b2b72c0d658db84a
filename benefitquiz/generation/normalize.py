from __future__ import annotations

import logging
from typing import Any, List, Mapping

from ..data.schemas import MAX_CHOICES, MIXED, TOPICS, Question, normalize_record
from ..errors import GenerationError, InvalidQuestionError

logger = logging.getLogger(__name__)


def normalize_remote_questions(payload: Any, topic: str, difficulty: str) -> List[Question]:
    """Turn a generator payload into validated questions.

    The requested difficulty is forced on every item. For "mixed" requests an
    item keeps its own topic when it names a known one, else ``basics``.
    Choices beyond four are dropped and a non-integer answer defaults to 0.
    Entries that still fail validation are discarded.

    Raises:
        GenerationError: if the payload has no ``questions`` list
    """
    if not isinstance(payload, Mapping) or not isinstance(payload.get("questions"), list):
        raise GenerationError("Generator payload is missing a 'questions' list")

    out: List[Question] = []
    for idx, item in enumerate(payload["questions"]):
        if not isinstance(item, Mapping):
            logger.debug("Discarding generated item %d: not an object", idx)
            continue
        raw = dict(item)
        if topic == MIXED:
            raw["topic"] = raw.get("topic") if raw.get("topic") in TOPICS else "basics"
        else:
            raw["topic"] = topic
        raw["difficulty"] = difficulty
        if isinstance(raw.get("choices"), list):
            raw["choices"] = raw["choices"][:MAX_CHOICES]
        answer = raw.get("answer")
        if not isinstance(answer, int) or isinstance(answer, bool):
            raw["answer"] = 0
        try:
            out.append(normalize_record(raw, source="remote"))
        except InvalidQuestionError as e:
            logger.debug("Discarding generated item %d: %s", idx, e)
    logger.info("Normalized %d of %d generated questions", len(out), len(payload["questions"]))
    return out
