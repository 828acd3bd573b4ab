"""
PHQ-9 / GAD-7 catalogs: questions, answer options and severity bands.
Fixed tables, shared by the scorer and the /assessments/questions endpoint.
"""
from typing import Final, Literal

from pydantic import BaseModel, ConfigDict

Instrument = Literal["phq9", "gad7"]
AssessmentKind = Literal["phq9", "gad7", "combined"]
SeverityLevel = Literal["none", "mild", "moderate", "moderately_severe", "severe"]


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    category: str


class AnswerOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: int
    label: str
    description: str


class SeverityBand(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int
    max: int
    level: SeverityLevel
    label: str

    def contains(self, score: int) -> bool:
        return self.min <= score <= self.max


PHQ9_QUESTIONS: Final[tuple[Question, ...]] = (
    Question(id="phq1", text="Little interest or pleasure in doing things", category="Interest/Pleasure"),
    Question(id="phq2", text="Feeling down, depressed, or hopeless", category="Mood"),
    Question(id="phq3", text="Trouble falling or staying asleep, or sleeping too much", category="Sleep"),
    Question(id="phq4", text="Feeling tired or having little energy", category="Energy"),
    Question(id="phq5", text="Poor appetite or overeating", category="Appetite"),
    Question(
        id="phq6",
        text="Feeling bad about yourself, or that you are a failure or have let yourself or your family down",
        category="Self-esteem",
    ),
    Question(
        id="phq7",
        text="Trouble concentrating on things, such as reading the newspaper or watching television",
        category="Concentration",
    ),
    Question(
        id="phq8",
        text=(
            "Moving or speaking so slowly that other people could have noticed? Or the opposite, "
            "being so fidgety or restless that you have been moving around a lot more than usual"
        ),
        category="Psychomotor",
    ),
    Question(
        id="phq9",
        text="Thoughts that you would be better off dead or of hurting yourself in some way",
        category="Suicidal ideation",
    ),
)

GAD7_QUESTIONS: Final[tuple[Question, ...]] = (
    Question(id="gad1", text="Feeling nervous, anxious, or on edge", category="Nervousness"),
    Question(id="gad2", text="Not being able to stop or control worrying", category="Control"),
    Question(id="gad3", text="Worrying too much about different things", category="Worry"),
    Question(id="gad4", text="Trouble relaxing", category="Relaxation"),
    Question(id="gad5", text="Being so restless that it is hard to sit still", category="Restlessness"),
    Question(id="gad6", text="Becoming easily annoyed or irritable", category="Irritability"),
    Question(id="gad7", text="Feeling afraid as if something awful might happen", category="Fear"),
)

# 0..3, "over the last 2 weeks, how often have you been bothered by..."
ANSWER_OPTIONS: Final[tuple[AnswerOption, ...]] = (
    AnswerOption(value=0, label="Not at all", description="0 days"),
    AnswerOption(value=1, label="Several days", description="1-7 days"),
    AnswerOption(value=2, label="More than half the days", description="8-14 days"),
    AnswerOption(value=3, label="Nearly every day", description="15+ days"),
)
MIN_VALUE: Final[int] = 0
MAX_VALUE: Final[int] = 3

SEVERITY_BANDS: Final[dict[Instrument, tuple[SeverityBand, ...]]] = {
    "phq9": (
        SeverityBand(min=0, max=4, level="none", label="Minimal depression"),
        SeverityBand(min=5, max=9, level="mild", label="Mild depression"),
        SeverityBand(min=10, max=14, level="moderate", label="Moderate depression"),
        SeverityBand(min=15, max=19, level="moderately_severe", label="Moderately severe depression"),
        SeverityBand(min=20, max=27, level="severe", label="Severe depression"),
    ),
    "gad7": (
        SeverityBand(min=0, max=4, level="none", label="Minimal anxiety"),
        SeverityBand(min=5, max=9, level="mild", label="Mild anxiety"),
        SeverityBand(min=10, max=14, level="moderate", label="Moderate anxiety"),
        SeverityBand(min=15, max=21, level="severe", label="Severe anxiety"),
    ),
}

CATALOGS: Final[dict[Instrument, tuple[Question, ...]]] = {
    "phq9": PHQ9_QUESTIONS,
    "gad7": GAD7_QUESTIONS,
}

# instruments administered per assessment kind, in display order
KIND_INSTRUMENTS: Final[dict[AssessmentKind, tuple[Instrument, ...]]] = {
    "phq9": ("phq9",),
    "gad7": ("gad7",),
    "combined": ("phq9", "gad7"),
}


def max_score(instrument: Instrument) -> int:
    return len(CATALOGS[instrument]) * MAX_VALUE


def instruments_for(kind: str) -> tuple[Instrument, ...]:
    try:
        return KIND_INSTRUMENTS[kind]  # type: ignore[index]
    except KeyError:
        raise ValueError(f"Unknown assessment kind: {kind!r}") from None


def expected_question_count(kind: str) -> int:
    """9 for phq9, 7 for gad7, 16 for combined."""
    return sum(len(CATALOGS[i]) for i in instruments_for(kind))


def questions_for(kind: str) -> list[Question]:
    return [q for i in instruments_for(kind) for q in CATALOGS[i]]
