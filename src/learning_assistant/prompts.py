"""Prompt templates for the three request kinds.

Each template asks the model to answer with a single JSON object whose
shape the frontend knows how to render.
"""

from dataclasses import dataclass
from typing import Any

from learning_assistant.entities import RequestType


@dataclass(frozen=True)
class PromptSpec:
    """Everything needed to build one chat-completion request."""

    system: str
    user: str
    temperature: float
    max_tokens: int


# ==================== CONCEPT ANALYSIS ====================

CONCEPT_ANALYSIS_SYSTEM = (
    "You are a professional educational assistant who specializes in concept "
    "analysis and breaking knowledge down. Always reply with valid JSON."
)

CONCEPT_ANALYSIS_TEMPLATE = """
As a professional educational assistant, analyze the core concepts in the text below.

Learner background: {userBackground}
Text to analyze: {text}

Return the analysis as JSON in exactly this shape:
{{
  "concepts": [
    {{
      "name": "concept name",
      "definition": "concept definition",
      "difficulty": "basic|intermediate|advanced",
      "prerequisites": ["prerequisite 1", "prerequisite 2"],
      "explanation": "explanation tailored to the learner background"
    }}
  ],
  "dependencies": [
    {{
      "from": "concept A",
      "to": "concept B",
      "relationship": "how A relates to B"
    }}
  ],
  "summary": "overall summary"
}}

Requirements:
1. Identify 3-5 core concepts
2. Adjust the depth of explanation to the learner background
3. Describe the dependencies between concepts
4. Give clear learning advice
"""

# ==================== LEARNING PATH ====================

LEARNING_PATH_SYSTEM = (
    "You are a professional learning planner who designs personalised study "
    "plans. Always reply with valid JSON."
)

LEARNING_PATH_TEMPLATE = """
As a professional learning planner, design a personalised learning path.

Goal: {goal}
Current level: {currentLevel}
Timeframe: {timeframe}
Preferences: {preferences}

Return the learning path as JSON in exactly this shape:
{{
  "title": "path title",
  "description": "path description",
  "estimatedDuration": "total estimated time",
  "phases": [
    {{
      "title": "phase title",
      "description": "phase description",
      "duration": "phase duration",
      "topics": [
        {{
          "name": "topic name",
          "description": "topic description",
          "difficulty": "basic|intermediate|advanced",
          "estimatedTime": "estimated time",
          "resources": [
            {{
              "type": "video|article|practice|project",
              "title": "resource title",
              "description": "resource description"
            }}
          ]
        }}
      ]
    }}
  ],
  "milestones": [
    {{
      "title": "milestone title",
      "description": "milestone description",
      "criteria": ["criterion 1", "criterion 2"]
    }}
  ]
}}

Requirements:
1. Produce 2-3 phases
2. Each phase has 3-5 topics
3. Mix concept study, practice exercises and projects
4. Recommend resources that match the preferences
5. Keep the schedule realistic
6. Set sensible milestone checkpoints
"""

# ==================== TEST GENERATION ====================

TEST_GENERATION_SYSTEM = (
    "You are an expert at writing high-quality assessment questions. "
    "Always reply with valid JSON."
)

TEST_GENERATION_TEMPLATE = """
As an expert question writer, create a test for the topic below.

Topic: {topic}
Difficulty: {difficulty}
Number of questions: {questionCount}
Question types: {questionTypes}

Return the test as JSON in exactly this shape:
{{
  "questions": [
    {{
      "id": "q1",
      "type": "multiple_choice|coding|explanation",
      "question": "question text",
      "options": ["option A", "option B", "option C", "option D"],
      "correctAnswer": "correct answer or option index",
      "explanation": "why this is the answer",
      "difficulty": "basic|intermediate|advanced"
    }}
  ],
  "totalPoints": 100,
  "timeLimit": 30
}}

Requirements:
1. Questions should build on each other and discriminate between levels
2. Multiple-choice questions have exactly 4 options
3. Coding questions state clear requirements
4. Explanation questions require deeper reasoning
5. Every question carries a detailed answer explanation
"""


def build_prompt(request_type: RequestType, payload: dict[str, Any]) -> PromptSpec:
    """Render the prompt for one request.

    Args:
        request_type: Which operation to perform
        payload: The request payload, keyed by camelCase field names

    Returns:
        PromptSpec with messages and sampling parameters

    Raises:
        ValueError: If the request type is unknown
    """
    if request_type is RequestType.CONCEPT_ANALYSIS:
        return PromptSpec(
            system=CONCEPT_ANALYSIS_SYSTEM,
            user=CONCEPT_ANALYSIS_TEMPLATE.format(
                text=payload["text"],
                userBackground=payload["userBackground"],
            ),
            temperature=0.7,
            max_tokens=2000,
        )

    if request_type is RequestType.LEARNING_PATH:
        preferences = payload.get("preferences") or []
        return PromptSpec(
            system=LEARNING_PATH_SYSTEM,
            user=LEARNING_PATH_TEMPLATE.format(
                goal=payload["goal"],
                currentLevel=payload["currentLevel"],
                timeframe=payload["timeframe"],
                preferences=", ".join(preferences) or "no particular preference",
            ),
            temperature=0.7,
            max_tokens=2500,
        )

    if request_type is RequestType.TEST_GENERATION:
        return PromptSpec(
            system=TEST_GENERATION_SYSTEM,
            user=TEST_GENERATION_TEMPLATE.format(
                topic=payload["topic"],
                difficulty=payload["difficulty"],
                questionCount=payload["questionCount"],
                questionTypes=", ".join(payload.get("questionTypes") or ["multiple_choice"]),
            ),
            temperature=0.8,
            max_tokens=3000,
        )

    raise ValueError(f"Unknown request type: {request_type}")
