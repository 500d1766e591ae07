from enum import Enum
from typing import List, Dict, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt


class ReviewCategory(str, Enum):
    UNDERGRADUATE = "Undergraduate Essay"
    JOURNAL = "Journal Article"


class CritiqueLevel(str, Enum):
    SUPPORTIVE = "Supportive"
    STANDARD = "Standard"
    RUTHLESS = "Ruthless"


class Score(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


AVAILABLE_CRITERIA = [
    "Clarity",
    "Argument Structure",
    "Originality",
    "Evidence Use",
    "Grammar & Style",
    "Referencing",
    "Critical Thinking",
    "Adherence to Academic Conventions",
]

FILLED_GLYPH = "■"
EMPTY_GLYPH = "□"


class CustomCriterion(BaseModel):
    id: str
    name: str = ""
    keywords: str = ""


def default_custom_criteria(count: int = 2) -> List[CustomCriterion]:
    return [CustomCriterion(id=str(i)) for i in range(1, count + 1)]


class ReviewConfiguration(BaseModel):
    category: ReviewCategory = ReviewCategory.UNDERGRADUATE
    critique_level: CritiqueLevel = CritiqueLevel.STANDARD
    selected_criteria: List[str] = []
    custom_criteria: List[CustomCriterion] = Field(default_factory=default_custom_criteria)

    def active_custom_criteria(self) -> List[CustomCriterion]:
        return [c for c in self.custom_criteria if c.name.strip()]


class FileData(BaseModel):
    name: str
    mime_type: str
    data: str  # Base64 encoded


class DocumentPayload(BaseModel):
    text: str = ""
    file: Optional[FileData] = None


# Response contract. Attribute names are pythonic, aliases are the wire keys.

class FeedbackPoint(BaseModel):
    point: str
    highlight: Optional[str] = None  # exact quoted snippet from the document
    general_feedback: Optional[StrictBool] = None


class CriterionResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    criterion: str
    score: Score
    visual_bar: str = Field(alias="visualBar", pattern=r"^[■□]{5}$")
    feedback_points: List[FeedbackPoint] = Field(alias="feedbackPoints", min_length=3, max_length=3)


class ReviewFeedback(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    overall_score: StrictInt = Field(alias="overallScore", ge=0, le=100)
    reviews: List[CriterionResult]

    def to_contract(self) -> Dict[str, Any]:
        """Dump using the wire keys, leaving out optional fields the model did not send."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
