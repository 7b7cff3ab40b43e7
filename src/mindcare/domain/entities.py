"""Mutable domain entities for MindCare Assistant."""

from __future__ import annotations

from dataclasses import dataclass, field

from mindcare.domain.enums import QuestionnaireKind, ResponseOption


@dataclass(slots=True)
class AssessmentSession:
    """In-progress questionnaire state for one conversation.

    ``question_index`` always equals ``len(scores)``. A session with
    ``kind is None`` is idle.
    """

    kind: QuestionnaireKind | None = None
    question_index: int = 0
    scores: list[int] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        """Whether a questionnaire is awaiting an answer."""
        return self.kind is not None

    def begin(self, kind: QuestionnaireKind) -> None:
        """Start a questionnaire, discarding any partial answers."""
        self.kind = kind
        self.question_index = 0
        self.scores = []

    def record(self, score: int) -> None:
        """Append a validated score and advance to the next question.

        Raises:
            RuntimeError: If no questionnaire is active.
            ValueError: If score is outside 0-3.
        """
        if self.kind is None:
            raise RuntimeError("No assessment in progress")
        if not ResponseOption.NOT_AT_ALL <= score <= ResponseOption.NEARLY_EVERY_DAY:
            raise ValueError(f"Score {score} out of range 0-3")
        self.scores.append(score)
        self.question_index += 1

    def reset(self) -> None:
        """Return to idle."""
        self.kind = None
        self.question_index = 0
        self.scores = []
