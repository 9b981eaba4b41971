"""
Diff Data Models

Merge Request 변경 파일 관련 데이터 모델들
"""

from dataclasses import dataclass
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_validator


UNKNOWN_PATH = "(unknown path)"


@dataclass(frozen=True)
class DiffRecord:
    """변경된 파일 하나의 경로와 unified diff"""
    old_path: Optional[str] = None
    new_path: Optional[str] = None
    patch_text: Optional[str] = None

    @property
    def effective_path(self) -> Optional[str]:
        """새 경로 우선, 없으면 기존 경로"""
        if self.new_path:
            return self.new_path
        return self.old_path or None

    @property
    def display_path(self) -> str:
        """프롬프트 표시용 경로"""
        return self.effective_path or UNKNOWN_PATH

    @property
    def has_path(self) -> bool:
        return bool(self.effective_path)

    @property
    def has_patch(self) -> bool:
        return bool(self.patch_text)


# Pydantic model for payload validation
class DiffRecordRequest(BaseModel):
    """GitLab diff 페이로드 검증용 모델"""
    model_config = ConfigDict(extra="ignore")

    old_path: Optional[str] = None
    new_path: Optional[str] = None
    diff: Optional[str] = None

    @field_validator("old_path", "new_path")
    @classmethod
    def validate_path(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    def to_record(self) -> DiffRecord:
        """도메인 모델로 변환"""
        return DiffRecord(
            old_path=self.old_path,
            new_path=self.new_path,
            patch_text=self.diff,
        )


def records_from_payload(payload: Optional[List[dict]]) -> List[DiffRecord]:
    """GitLab diff 목록을 DiffRecord 목록으로 변환"""
    if not payload:
        return []
    return [DiffRecordRequest.model_validate(item).to_record() for item in payload]
