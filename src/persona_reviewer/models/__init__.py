"""
Data Models

페르소나 리뷰 엔진의 핵심 데이터 모델들
"""

from .diff import DiffRecord, DiffRecordRequest, records_from_payload
from .persona import Persona, PersonaProfile, PERSONA_PROFILES, get_profile
from .selection import PersonaSelection

__all__ = [
    "DiffRecord",
    "DiffRecordRequest",
    "records_from_payload",
    "Persona",
    "PersonaProfile",
    "PERSONA_PROFILES",
    "get_profile",
    "PersonaSelection",
]
