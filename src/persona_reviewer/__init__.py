"""
Persona Reviewer

Merge Request 변경사항에 맞는 리뷰어 페르소나를 고르고 리뷰 프롬프트를 구성하는 엔진
"""

__version__ = "1.0.0"

from .api import PersonaReviewAPI, ReviewPlan

__all__ = ["PersonaReviewAPI", "ReviewPlan"]
