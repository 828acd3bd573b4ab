"""
PHQ-9 / GAD-7 scoring.
Pure functions: subscale sums, severity bands, overall risk tier and flags.
Validation is all-or-nothing, a partial submission is never scored.
"""
import logging
from typing import Iterable, Literal, NamedTuple, Sequence

from pydantic import BaseModel, ConfigDict

from .questionnaires import (
    MAX_VALUE,
    MIN_VALUE,
    SEVERITY_BANDS,
    CATALOGS,
    Instrument,
    Question,
    SeverityLevel,
    expected_question_count,
    instruments_for,
    max_score,
)

logger = logging.getLogger(__name__)

RiskTier = Literal["low", "medium", "high"]

# total = phq9 + gad7 (0..48)
HIGH_RISK_MIN = 20
MEDIUM_RISK_MIN = 10


class AssessmentError(Exception):
    """Base for scoring failures."""


class IncompleteAssessmentError(AssessmentError):
    """One or more required questions are unanswered."""


class InvalidResponseValueError(AssessmentError):
    """A response value is not an integer in [0, 3]."""


class ScoreOutOfRangeError(AssessmentError):
    """Score outside the instrument's range. Internal consistency fault."""


class Response(NamedTuple):
    question_id: str
    value: int


class AssessmentResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    phq9_score: int
    gad7_score: int
    total_score: int
    phq9_severity: SeverityLevel
    gad7_severity: SeverityLevel
    overall_risk: RiskTier
    crisis_resources_provided: bool
    follow_up_needed: bool


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def score_subscale(responses: Iterable[Response], catalog: Sequence[Question]) -> int:
    """
    Sum of the values answering `catalog`.
    Responses to questions outside the catalog are ignored.
    """
    wanted = {q.id for q in catalog}
    answered: dict[str, int] = {}
    for r in responses:
        if r.question_id not in wanted:
            continue
        if r.question_id in answered:
            raise IncompleteAssessmentError(f"Question {r.question_id} answered more than once")
        if not _is_int(r.value) or not MIN_VALUE <= r.value <= MAX_VALUE:
            raise InvalidResponseValueError(
                f"Invalid value {r.value!r} for {r.question_id}; expected an integer {MIN_VALUE}-{MAX_VALUE}"
            )
        answered[r.question_id] = r.value

    missing = [q.id for q in catalog if q.id not in answered]
    if missing:
        raise IncompleteAssessmentError(f"Unanswered questions: {', '.join(missing)}")
    return sum(answered.values())


def classify_severity(score: int, instrument: Instrument) -> SeverityLevel:
    if instrument not in SEVERITY_BANDS:
        raise ValueError(f"Unknown instrument: {instrument!r}")
    top = max_score(instrument)
    if not _is_int(score) or not 0 <= score <= top:
        logger.error("Score %r out of range for %s (0..%d)", score, instrument, top)
        raise ScoreOutOfRangeError(f"{instrument} score {score!r} outside 0..{top}")
    for band in SEVERITY_BANDS[instrument]:
        if band.contains(score):
            return band.level
    # bands partition 0..max, unreachable
    logger.error("No severity band for %s score %d", instrument, score)
    raise ScoreOutOfRangeError(f"No band for {instrument} score {score}")


def classify_overall_risk(total_score: int) -> RiskTier:
    """
    >= 20 high, 10..19 medium, otherwise low.
    Never returns "crisis": no threshold for it is defined.
    """
    top = max_score("phq9") + max_score("gad7")
    if not _is_int(total_score) or not 0 <= total_score <= top:
        logger.error("Total score %r out of range (0..%d)", total_score, top)
        raise ScoreOutOfRangeError(f"Total score {total_score!r} outside 0..{top}")
    if total_score >= HIGH_RISK_MIN:
        return "high"
    if total_score >= MEDIUM_RISK_MIN:
        return "medium"
    return "low"


def risk_flags(risk: RiskTier) -> tuple[bool, bool]:
    """(crisis_resources_provided, follow_up_needed)"""
    return risk == "high", risk != "low"


def submit_assessment(kind: str, responses: Sequence[Response]) -> AssessmentResult:
    instruments = instruments_for(kind)
    responses = list(responses)
    expected = expected_question_count(kind)
    if len(responses) != expected:
        raise IncompleteAssessmentError(
            f"{kind} assessment needs {expected} responses, got {len(responses)}"
        )

    scores: dict[Instrument, int] = {"phq9": 0, "gad7": 0}
    severities: dict[Instrument, SeverityLevel] = {"phq9": "none", "gad7": "none"}
    for instrument in instruments:
        scores[instrument] = score_subscale(responses, CATALOGS[instrument])
    for instrument in instruments:
        severities[instrument] = classify_severity(scores[instrument], instrument)

    total = scores["phq9"] + scores["gad7"]
    risk = classify_overall_risk(total)
    crisis, follow_up = risk_flags(risk)
    return AssessmentResult(
        phq9_score=scores["phq9"],
        gad7_score=scores["gad7"],
        total_score=total,
        phq9_severity=severities["phq9"],
        gad7_severity=severities["gad7"],
        overall_risk=risk,
        crisis_resources_provided=crisis,
        follow_up_needed=follow_up,
    )
