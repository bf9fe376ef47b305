"""Repository layer for data access."""
from survey_results.repositories.survey_repository import SurveyRepository

__all__ = [
    "SurveyRepository",
]
