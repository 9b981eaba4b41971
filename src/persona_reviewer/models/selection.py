"""
Selection Data Models

페르소나 선택 결과 데이터 모델
"""

from dataclasses import dataclass, field
from typing import FrozenSet, List

from .persona import Persona


@dataclass(frozen=True)
class PersonaSelection:
    """주 페르소나와 추가 점검 권장 페르소나"""
    primary: Persona
    primary_score: int
    mentions: FrozenSet[Persona] = field(default_factory=frozenset)

    def __post_init__(self):
        """데이터 검증"""
        if self.primary in self.mentions:
            raise ValueError("Primary persona cannot be mentioned")
        object.__setattr__(self, "mentions", frozenset(self.mentions))

    @property
    def ordered_mentions(self) -> List[Persona]:
        """선언 순서로 정렬된 추가 점검 페르소나"""
        return sorted(self.mentions, key=lambda persona: persona.rank)

    @property
    def is_fallback(self) -> bool:
        return self.primary is Persona.GENERAL_REVIEWER
