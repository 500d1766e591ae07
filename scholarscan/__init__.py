from .schemas import (
    AVAILABLE_CRITERIA, CritiqueLevel, CustomCriterion, FileData, ReviewCategory,
    ReviewConfiguration, ReviewFeedback,
)
from .session import ReviewSession, ReviewStatus

__version__ = "0.1.0"

__all__ = [
    'AVAILABLE_CRITERIA', 'CritiqueLevel', 'CustomCriterion', 'FileData', 'ReviewCategory',
    'ReviewConfiguration', 'ReviewFeedback', 'ReviewSession', 'ReviewStatus',
]
