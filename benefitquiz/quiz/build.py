"""Quiz build boundary: request validation and the build pipeline.

Local mode: load pool -> select -> present.
Remote mode: generate -> normalize -> dedupe, backfilled from the local
selector when short. Any generator failure silently takes the local path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..data.loader import load_pool
from ..data.schemas import DIFFICULTIES, REQUEST_TOPICS, Question
from ..data.topics import topic_label
from ..errors import GenerationError, RequestValidationError
from ..generation.client import QuestionGenerator
from ..generation.normalize import normalize_remote_questions
from ..selection.dedupe import dedupe_by_concept, dedupe_by_text, dedupe_exact
from ..selection.keys import DEFAULT_POLICY, ConceptKeyPolicy, concept_key, text_key
from ..selection.presenter import present
from ..selection.selector import MAX_QUESTIONS, select_with_report
from ..utils.rng import RandomSource

logger = logging.getLogger(__name__)

PoolLoader = Callable[[str], Sequence[Question]]


def parse_requested_count(raw: Any) -> Tuple[int, Optional[str]]:
    """Validate the requested question count.

    Returns ``(count, notice)``. Counts above the maximum are clamped and
    come back with a notice; blank, non-numeric and sub-1 values are rejected.

    Raises:
        RequestValidationError: for blank, non-numeric, or < 1 input
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise RequestValidationError(
            f"Please enter how many questions you want (1-{MAX_QUESTIONS})."
        )
    if isinstance(raw, bool):
        raise RequestValidationError(
            f"Question count must be a whole number between 1 and {MAX_QUESTIONS}."
        )
    if isinstance(raw, int):
        count = raw
    else:
        try:
            count = int(str(raw).strip())
        except ValueError:
            raise RequestValidationError(
                f"Question count must be a whole number between 1 and {MAX_QUESTIONS}."
            ) from None
    if count < 1:
        raise RequestValidationError("Question count must be at least 1.")
    if count > MAX_QUESTIONS:
        return MAX_QUESTIONS, (
            f"Requested {count} questions; the maximum is {MAX_QUESTIONS}, "
            f"so {MAX_QUESTIONS} will be used."
        )
    return count, None


@dataclass
class QuizBuildRequest:
    topic: str
    difficulty: str
    requested_count: int
    use_remote_generation: bool = False
    notice: Optional[str] = None

    @classmethod
    def from_form(
        cls, topic: str, difficulty: str, count: Any, use_remote_generation: bool = False
    ) -> "QuizBuildRequest":
        """Build a request from raw user input, rejecting anything malformed."""
        topic = (topic or "").strip().lower()
        difficulty = (difficulty or "").strip().lower()
        if topic not in REQUEST_TOPICS:
            raise RequestValidationError(
                f"Choose a topic from: {', '.join(REQUEST_TOPICS)}.", field="topic"
            )
        if difficulty not in DIFFICULTIES:
            raise RequestValidationError(
                f"Choose a difficulty from: {', '.join(DIFFICULTIES)}.", field="difficulty"
            )
        parsed, notice = parse_requested_count(count)
        return cls(topic, difficulty, parsed, bool(use_remote_generation), notice)


@dataclass
class QuizBuildResult:
    questions: List[Question]
    requested_count: int
    source: str = "bank"
    relaxed: bool = False
    notices: List[str] = field(default_factory=list)

    @property
    def effective_count(self) -> int:
        return len(self.questions)

    @property
    def shortfall(self) -> bool:
        return self.effective_count < self.requested_count

    @property
    def notice(self) -> Optional[str]:
        return " ".join(self.notices) if self.notices else None


def _shortfall_notice(topic: str, difficulty: str, available: int, requested: int) -> str:
    return (
        f"Only {available} unique questions are available for "
        f"{topic_label(topic)} ({difficulty}); requested {requested}."
    )


def _build_local(
    request: QuizBuildRequest,
    pool_loader: PoolLoader,
    rng: RandomSource,
    policy: ConceptKeyPolicy,
) -> QuizBuildResult:
    pool = pool_loader(request.topic)
    report = select_with_report(
        pool, request.topic, request.difficulty, request.requested_count, rng=rng, policy=policy
    )
    return QuizBuildResult(
        questions=present(report.questions, rng),
        requested_count=request.requested_count,
        source="bank",
        relaxed=report.relaxed,
    )


def _build_remote(
    request: QuizBuildRequest,
    generator: QuestionGenerator,
    pool_loader: PoolLoader,
    rng: RandomSource,
    policy: ConceptKeyPolicy,
) -> QuizBuildResult:
    payload = generator.generate(request.topic, request.difficulty, request.requested_count)
    remote = normalize_remote_questions(payload, request.topic, request.difficulty)
    remote = dedupe_by_text(dedupe_by_concept(dedupe_exact(remote), policy))
    if not remote:
        raise GenerationError("Generator returned no usable questions")
    remote = rng.shuffle(remote)[: request.requested_count]

    selected = list(remote)
    source = "remote"
    relaxed = False
    missing = request.requested_count - len(selected)
    if missing > 0:
        logger.info("Generator returned %d/%d; backfilling from local banks",
                    len(selected), request.requested_count)
        report = select_with_report(
            pool_loader(request.topic),
            request.topic,
            request.difficulty,
            missing,
            rng=rng,
            policy=policy,
            exclude_text_keys={text_key(q) for q in remote},
            exclude_concept_keys={concept_key(q, policy) for q in remote},
        )
        if report.questions:
            selected.extend(report.questions)
            source = "remote+bank"
        relaxed = report.relaxed

    return QuizBuildResult(
        questions=present(rng.shuffle(selected), rng),
        requested_count=request.requested_count,
        source=source,
        relaxed=relaxed,
    )


def build_quiz(
    request: QuizBuildRequest,
    pool_loader: Optional[PoolLoader] = None,
    generator: Optional[QuestionGenerator] = None,
    rng: Optional[RandomSource] = None,
    policy: ConceptKeyPolicy = DEFAULT_POLICY,
) -> QuizBuildResult:
    """Produce a best-effort quiz for ``request``.

    Never raises for data problems: generator failures fall back to the local
    banks and short supply is reported through ``notice``.
    """
    pool_loader = pool_loader or load_pool
    rng = rng or RandomSource()

    result: Optional[QuizBuildResult] = None
    if request.use_remote_generation:
        try:
            result = _build_remote(request, generator or QuestionGenerator(), pool_loader, rng, policy)
        except (GenerationError, OSError) as e:
            logger.warning("Remote generation failed, using local bank: %s", e)

    if result is None:
        result = _build_local(request, pool_loader, rng, policy)

    if request.notice:
        result.notices.append(request.notice)
    if result.shortfall:
        result.notices.append(_shortfall_notice(
            request.topic, request.difficulty, result.effective_count, request.requested_count
        ))
        logger.info("Shortfall for %s/%s: %d of %d", request.topic, request.difficulty,
                    result.effective_count, request.requested_count)
    return result
