"""
Configuration Management

시스템 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from pathlib import Path
import logging

from .review.weights import MAX_SCORE, WeightTable
from .llm.prompts import MAX_FILE_LIST


REVIEW_MODES = {'persona', 'integrated'}
REVIEW_LANGUAGES = {'korean', 'english'}


def _env_int(name: str) -> Optional[int]:
    """설정된 경우에만 정수로 변환"""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return int(value)


@dataclass
class ReviewConfig:
    """리뷰 모드 및 프롬프트 설정"""
    mode: str = "persona"
    language: str = "korean"
    max_file_list: int = MAX_FILE_LIST
    system_prompt: Optional[str] = None

    @property
    def is_persona_mode(self) -> bool:
        """페르소나 모드 여부"""
        return self.mode.lower() == "persona"

    @property
    def is_integrated_mode(self) -> bool:
        """통합 모드 여부"""
        return self.mode.lower() == "integrated"


@dataclass
class ScoringConfig:
    """페르소나 점수 계산 설정"""
    # None이면 가중치 파일(없으면 기본값)의 임계값을 그대로 사용
    selection_threshold: Optional[int] = None
    mention_threshold: Optional[int] = None
    weights_file: Optional[str] = None

    def build_weight_table(self) -> WeightTable:
        """가중치 파일(없으면 기본값)로 테이블을 만들고 명시된 임계값만 덮어씀"""
        if self.weights_file:
            table = WeightTable.from_yaml(self.weights_file)
        else:
            table = WeightTable.default()

        if self.selection_threshold is None and self.mention_threshold is None:
            return table

        return table.with_thresholds(
            table.selection_threshold if self.selection_threshold is None else self.selection_threshold,
            table.mention_threshold if self.mention_threshold is None else self.mention_threshold,
        )


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    review: ReviewConfig = field(default_factory=ReviewConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        return cls(
            review=ReviewConfig(
                mode=os.getenv("REVIEW_MODE", "persona"),
                language=os.getenv("REVIEW_LANGUAGE", "korean"),
                max_file_list=int(os.getenv("MAX_FILE_LIST", str(MAX_FILE_LIST))),
                system_prompt=os.getenv("LLM_SYSTEM_PROMPT"),
            ),
            scoring=ScoringConfig(
                selection_threshold=_env_int("SELECTION_THRESHOLD"),
                mention_threshold=_env_int("MENTION_THRESHOLD"),
                weights_file=os.getenv("PERSONA_WEIGHTS_FILE"),
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=int(os.getenv("LOG_MAX_SIZE", str(10 * 1024 * 1024))),
                backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
            ),
            debug=os.getenv("DEBUG", "false").lower() == "true",
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        return cls(
            review=ReviewConfig(**(config_data.get('review') or {})),
            scoring=ScoringConfig(**(config_data.get('scoring') or {})),
            logging=LoggingConfig(**(config_data.get('logging') or {})),
            debug=config_data.get('debug', False),
        )

    def validate(self) -> None:
        """설정 유효성 검사"""
        errors = []

        # 리뷰 모드 검증
        if self.review.mode.lower() not in REVIEW_MODES:
            errors.append(f"Invalid review mode: {self.review.mode}")

        # 언어 검증
        if self.review.language not in REVIEW_LANGUAGES:
            errors.append(f"Invalid review language: {self.review.language}")

        if self.review.max_file_list <= 0:
            errors.append("max_file_list must be positive")

        # 임계값 검증
        scoring_errors = []
        for name in ('selection_threshold', 'mention_threshold'):
            value = getattr(self.scoring, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                scoring_errors.append(f"{name} must be an integer")
            elif not 0 <= value <= MAX_SCORE:
                scoring_errors.append(f"{name} must be between 0 and {MAX_SCORE}")

        # 가중치 파일 확인
        if self.scoring.weights_file and not Path(self.scoring.weights_file).exists():
            scoring_errors.append(f"Weights file not found: {self.scoring.weights_file}")

        # 가중치 파일의 임계값과 합쳐진 최종 테이블 검증
        if not scoring_errors:
            try:
                self.scoring.build_weight_table()
            except ValueError as e:
                scoring_errors.append(str(e))

        errors.extend(scoring_errors)

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        return {
            'review': {
                'mode': self.review.mode,
                'language': self.review.language,
                'max_file_list': self.review.max_file_list,
                'system_prompt': self.review.system_prompt,
            },
            'scoring': {
                'selection_threshold': self.scoring.selection_threshold,
                'mention_threshold': self.scoring.mention_threshold,
                'weights_file': self.scoring.weights_file,
            },
            'logging': {
                'level': self.logging.level,
                'format': self.logging.format,
                'file_path': self.logging.file_path,
                'max_file_size': self.logging.max_file_size,
                'backup_count': self.logging.backup_count,
            },
            'debug': self.debug,
        }


class ConfigManager:
    """설정 관리자"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

    def update_config(self, **kwargs) -> None:
        """설정 업데이트"""
        config_dict = self._config.to_dict()

        for key, value in kwargs.items():
            if '.' in key:
                # 중첩된 설정 (예: 'scoring.selection_threshold')
                section, field_name = key.split('.', 1)
                if section not in config_dict or not isinstance(config_dict[section], dict):
                    raise ValueError(f"Unknown config section: {section}")
                if field_name not in config_dict[section]:
                    raise ValueError(f"Unknown config field: {key}")
                config_dict[section][field_name] = value
            else:
                # 최상위 설정
                if key not in config_dict:
                    raise ValueError(f"Unknown config field: {key}")
                config_dict[key] = value

        new_config = AppConfig(
            review=ReviewConfig(**config_dict['review']),
            scoring=ScoringConfig(**config_dict['scoring']),
            logging=LoggingConfig(**config_dict['logging']),
            debug=config_dict['debug'],
        )

        # 검증 실패 시 기존 설정 유지
        new_config.validate()
        self._config = new_config
        self._setup_logging()

    def _setup_logging(self) -> None:
        """로깅 설정"""
        level = logging.DEBUG if self._config.debug else getattr(logging, self._config.logging.level.upper())

        logging.basicConfig(
            level=level,
            format=self._config.logging.format,
        )

        # 파일 로깅이 설정된 경우 로테이션 설정
        if self._config.logging.file_path:
            from logging.handlers import RotatingFileHandler

            root_logger = logging.getLogger()
            already_attached = any(
                isinstance(h, RotatingFileHandler)
                and getattr(h, 'baseFilename', None) == os.path.abspath(self._config.logging.file_path)
                for h in root_logger.handlers
            )
            if not already_attached:
                handler = RotatingFileHandler(
                    self._config.logging.file_path,
                    maxBytes=self._config.logging.max_file_size,
                    backupCount=self._config.logging.backup_count,
                )
                handler.setFormatter(logging.Formatter(self._config.logging.format))
                root_logger.addHandler(handler)


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """YAML 파일 또는 환경 변수에서 설정 로드"""
    if config_path:
        return AppConfig.from_yaml(config_path)
    return AppConfig.from_env()
