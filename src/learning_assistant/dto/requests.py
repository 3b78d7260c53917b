"""Request DTOs for API endpoints.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Difficulty = Literal["basic", "intermediate", "advanced"]
QuestionType = Literal["multiple_choice", "coding", "explanation"]


class GenerationRequest(BaseModel):
    """Base for the three generation requests."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """The payload that is fingerprinted, sent to the model and recorded."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ConceptAnalysisRequest(GenerationRequest):
    """Request DTO for concept analysis."""

    text: str = Field(..., description="The text whose concepts should be analyzed", min_length=1)
    user_background: str = Field(
        ...,
        description="Learner background used to tune the explanations",
        min_length=1,
    )


class LearningPathRequest(GenerationRequest):
    """Request DTO for learning path generation."""

    goal: str = Field(..., description="What the learner wants to achieve", min_length=1)
    current_level: str = Field(..., description="The learner's current level", min_length=1)
    timeframe: str = Field(..., description="Time available, e.g. '3 months'", min_length=1)
    preferences: list[str] | None = Field(
        None,
        description="Optional learning preferences (videos, projects, ...)",
    )


class TestGenerationRequest(GenerationRequest):
    """Request DTO for test generation."""

    __test__ = False  # not a pytest test class

    topic: str = Field(..., description="Topic the questions should cover", min_length=1)
    difficulty: Difficulty = Field(..., description="Overall difficulty")
    question_count: int = Field(..., description="Number of questions", ge=1, le=50)
    question_types: list[QuestionType] = Field(
        default_factory=lambda: ["multiple_choice"],
        description="Question kinds to include",
        min_length=1,
    )
