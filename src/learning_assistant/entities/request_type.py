"""Request kind shared by cache entries and history entries."""

from enum import Enum


class RequestType(str, Enum):
    """Closed set of operations the model is asked to perform."""

    CONCEPT_ANALYSIS = "concept-analysis"
    LEARNING_PATH = "learning-path"
    TEST_GENERATION = "test-generation"
