"""
Persona Weight Table

Holds every scoring rule as immutable data: file path keywords, file
extensions, diff content keywords, complexity patterns and domain keyword
sets, together with the selection and mention thresholds.

The defaults below can be overridden section by section from a YAML file so
operators can tune scoring without touching code.
"""

import re
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

import yaml

from ..models.persona import Persona


logger = logging.getLogger(__name__)

P = Persona

SELECTION_THRESHOLD = 40
MENTION_THRESHOLD = 60

MAX_SCORE = 100
KEYWORD_SET_STEP = 5
KEYWORD_SET_CAP = 20

COMPLEXITY_FLAGS = re.IGNORECASE | re.DOTALL


# ============ File path keywords (matched case-insensitively) ============
DEFAULT_PATH_WEIGHTS: Dict[str, Dict[Persona, int]] = {
    # backend layers
    "controller": {P.BACKEND_SPECIALIST: 40, P.SECURITY_AUDITOR: 35, P.BUSINESS_ANALYST: 25},
    "service": {P.BACKEND_SPECIALIST: 40, P.BUSINESS_ANALYST: 35, P.ARCHITECT: 20},
    "repository": {P.DATA_GUARDIAN: 40, P.BACKEND_SPECIALIST: 30, P.PERFORMANCE_TUNER: 25},
    "entity": {P.DATA_GUARDIAN: 35, P.BACKEND_SPECIALIST: 30, P.ARCHITECT: 25},
    "config": {P.DEVOPS_ENGINEER: 35, P.SECURITY_AUDITOR: 30, P.BACKEND_SPECIALIST: 25},
    "api": {P.BACKEND_SPECIALIST: 40, P.ARCHITECT: 30, P.SECURITY_AUDITOR: 25},
    # frontend
    "component": {P.FRONTEND_SPECIALIST: 40, P.QUALITY_COACH: 25, P.ARCHITECT: 20},
    "page": {P.FRONTEND_SPECIALIST: 40, P.BUSINESS_ANALYST: 25},
    "hook": {P.FRONTEND_SPECIALIST: 40, P.PERFORMANCE_TUNER: 25},
    "style": {P.FRONTEND_SPECIALIST: 40, P.QUALITY_COACH: 20},
    # data science
    "model": {P.DATA_SCIENTIST: 40, P.PERFORMANCE_TUNER: 25, P.ARCHITECT: 20},
    "data": {P.DATA_SCIENTIST: 35, P.DATA_GUARDIAN: 30, P.PERFORMANCE_TUNER: 25},
    "analysis": {P.DATA_SCIENTIST: 40, P.BUSINESS_ANALYST: 25},
    "recommendation": {P.DATA_SCIENTIST: 40, P.BUSINESS_ANALYST: 30},
    # infrastructure
    "docker": {P.DEVOPS_ENGINEER: 40, P.SECURITY_AUDITOR: 25, P.PERFORMANCE_TUNER: 20},
    "k8s": {P.DEVOPS_ENGINEER: 40, P.ARCHITECT: 25, P.SECURITY_AUDITOR: 20},
    "pipeline": {P.DEVOPS_ENGINEER: 40, P.QUALITY_COACH: 25},
    "monitoring": {P.DEVOPS_ENGINEER: 40, P.PERFORMANCE_TUNER: 30},
    # tests
    "test": {P.QUALITY_COACH: 40, P.BACKEND_SPECIALIST: 20, P.FRONTEND_SPECIALIST: 20},
}

# ============ File suffixes (matched case-sensitively) ============
DEFAULT_EXTENSION_WEIGHTS: Dict[str, Dict[Persona, int]] = {
    ".java": {P.BACKEND_SPECIALIST: 25, P.QUALITY_COACH: 15, P.ARCHITECT: 10},
    ".py": {P.DATA_SCIENTIST: 30, P.BACKEND_SPECIALIST: 20, P.QUALITY_COACH: 15},
    ".sql": {P.DATA_GUARDIAN: 30, P.PERFORMANCE_TUNER: 20, P.BACKEND_SPECIALIST: 15},
    ".js": {P.FRONTEND_SPECIALIST: 30, P.QUALITY_COACH: 15, P.PERFORMANCE_TUNER: 10},
    ".jsx": {P.FRONTEND_SPECIALIST: 35, P.QUALITY_COACH: 15},
    ".ts": {P.FRONTEND_SPECIALIST: 30, P.QUALITY_COACH: 20, P.ARCHITECT: 15},
    ".tsx": {P.FRONTEND_SPECIALIST: 35, P.QUALITY_COACH: 20},
    ".vue": {P.FRONTEND_SPECIALIST: 35, P.QUALITY_COACH: 15},
    ".html": {P.FRONTEND_SPECIALIST: 30, P.QUALITY_COACH: 10},
    ".css": {P.FRONTEND_SPECIALIST: 25, P.QUALITY_COACH: 10},
    ".scss": {P.FRONTEND_SPECIALIST: 25, P.QUALITY_COACH: 10},
    ".sass": {P.FRONTEND_SPECIALIST: 25, P.QUALITY_COACH: 10},
    ".dockerfile": {P.DEVOPS_ENGINEER: 40, P.SECURITY_AUDITOR: 20, P.PERFORMANCE_TUNER: 15},
    ".yml": {P.DEVOPS_ENGINEER: 30, P.SECURITY_AUDITOR: 20, P.ARCHITECT: 15},
    ".yaml": {P.DEVOPS_ENGINEER: 30, P.SECURITY_AUDITOR: 20, P.ARCHITECT: 15},
    ".tf": {P.DEVOPS_ENGINEER: 35, P.SECURITY_AUDITOR: 25, P.ARCHITECT: 15},
    ".sh": {P.DEVOPS_ENGINEER: 30, P.SECURITY_AUDITOR: 20},
    ".conf": {P.DEVOPS_ENGINEER: 25, P.SECURITY_AUDITOR: 20, P.PERFORMANCE_TUNER: 15},
    ".properties": {P.BACKEND_SPECIALIST: 20, P.SECURITY_AUDITOR: 20, P.DEVOPS_ENGINEER: 15},
    ".json": {P.FRONTEND_SPECIALIST: 20, P.BACKEND_SPECIALIST: 15, P.DEVOPS_ENGINEER: 15},
    ".xml": {P.BACKEND_SPECIALIST: 20, P.DEVOPS_ENGINEER: 15},
    ".ipynb": {P.DATA_SCIENTIST: 40, P.QUALITY_COACH: 15},
    ".pkl": {P.DATA_SCIENTIST: 35, P.PERFORMANCE_TUNER: 15},
    ".csv": {P.DATA_SCIENTIST: 25, P.DATA_GUARDIAN: 20},
    ".parquet": {P.DATA_SCIENTIST: 30, P.PERFORMANCE_TUNER: 25},
    # build and package manifests
    ".gradle": {P.BACKEND_SPECIALIST: 25, P.DEVOPS_ENGINEER: 20, P.ARCHITECT: 15},
    "package.json": {P.FRONTEND_SPECIALIST: 30, P.DEVOPS_ENGINEER: 20},
    "requirements.txt": {P.DATA_SCIENTIST: 30, P.BACKEND_SPECIALIST: 20, P.DEVOPS_ENGINEER: 15},
    "poetry.lock": {P.DATA_SCIENTIST: 25, P.BACKEND_SPECIALIST: 20},
}

# ============ Diff content keywords (matched case-insensitively) ============
DEFAULT_KEYWORD_WEIGHTS: Dict[str, Dict[Persona, int]] = {
    # security
    "@PreAuthorize": {P.SECURITY_AUDITOR: 30},
    "@Secured": {P.SECURITY_AUDITOR: 30},
    "password": {P.SECURITY_AUDITOR: 25},
    "token": {P.SECURITY_AUDITOR: 25},
    "authentication": {P.SECURITY_AUDITOR: 25},
    "authorization": {P.SECURITY_AUDITOR: 25},
    "jwt": {P.SECURITY_AUDITOR: 25},
    "oauth": {P.SECURITY_AUDITOR: 25},
    "encrypt": {P.SECURITY_AUDITOR: 25},
    "decrypt": {P.SECURITY_AUDITOR: 25},
    "hash": {P.SECURITY_AUDITOR: 25},
    "csrf": {P.SECURITY_AUDITOR: 25},
    "xss": {P.SECURITY_AUDITOR: 25},
    # database
    "@Query": {P.DATA_GUARDIAN: 30, P.PERFORMANCE_TUNER: 20},
    "@Transactional": {P.DATA_GUARDIAN: 25, P.ARCHITECT: 15},
    "SELECT": {P.DATA_GUARDIAN: 25, P.PERFORMANCE_TUNER: 20},
    "INSERT": {P.DATA_GUARDIAN: 25},
    "UPDATE": {P.DATA_GUARDIAN: 25},
    "DELETE": {P.DATA_GUARDIAN: 25},
    "JOIN": {P.PERFORMANCE_TUNER: 25, P.DATA_GUARDIAN: 20},
    "INDEX": {P.DATA_GUARDIAN: 25, P.PERFORMANCE_TUNER: 20},
    "postgresql": {P.DATA_GUARDIAN: 25},
    "redis": {P.DATA_GUARDIAN: 25, P.PERFORMANCE_TUNER: 20},
    "weaviate": {P.DATA_SCIENTIST: 30, P.DATA_GUARDIAN: 20},
    # performance
    "@Cacheable": {P.PERFORMANCE_TUNER: 30},
    "@Async": {P.PERFORMANCE_TUNER: 25, P.ARCHITECT: 15},
    "CompletableFuture": {P.PERFORMANCE_TUNER: 25},
    "Parallel": {P.PERFORMANCE_TUNER: 25},
    "Stream": {P.PERFORMANCE_TUNER: 20},
    "cache": {P.PERFORMANCE_TUNER: 25},
    "optimization": {P.PERFORMANCE_TUNER: 25},
    "latency": {P.PERFORMANCE_TUNER: 25},
    "throughput": {P.PERFORMANCE_TUNER: 25},
    # backend: Spring Boot
    "@RestController": {P.BACKEND_SPECIALIST: 30},
    "@Service": {P.BACKEND_SPECIALIST: 25, P.ARCHITECT: 15},
    "@Repository": {P.BACKEND_SPECIALIST: 25, P.DATA_GUARDIAN: 15},
    "@Component": {P.BACKEND_SPECIALIST: 20, P.ARCHITECT: 15},
    "@Autowired": {P.BACKEND_SPECIALIST: 20},
    "@RequestMapping": {P.BACKEND_SPECIALIST: 25},
    "@GetMapping": {P.BACKEND_SPECIALIST: 25},
    "@PostMapping": {P.BACKEND_SPECIALIST: 25},
    "SpringApplication": {P.BACKEND_SPECIALIST: 25},
    # backend: FastAPI
    "FastAPI": {P.BACKEND_SPECIALIST: 30, P.DATA_SCIENTIST: 20},
    "pydantic": {P.BACKEND_SPECIALIST: 25, P.DATA_SCIENTIST: 20},
    "uvicorn": {P.BACKEND_SPECIALIST: 20},
    # frontend: React
    "useState": {P.FRONTEND_SPECIALIST: 30},
    "useEffect": {P.FRONTEND_SPECIALIST: 30},
    "useContext": {P.FRONTEND_SPECIALIST: 25},
    "useReducer": {P.FRONTEND_SPECIALIST: 25},
    "component": {P.FRONTEND_SPECIALIST: 25},
    "props": {P.FRONTEND_SPECIALIST: 25},
    "state": {P.FRONTEND_SPECIALIST: 20},
    "jsx": {P.FRONTEND_SPECIALIST: 25},
    "tsx": {P.FRONTEND_SPECIALIST: 25},
    # frontend: JavaScript/TypeScript
    "typescript": {P.FRONTEND_SPECIALIST: 25},
    "interface": {P.FRONTEND_SPECIALIST: 20, P.ARCHITECT: 15},
    "type": {P.FRONTEND_SPECIALIST: 20},
    # frontend: styling
    "styled-components": {P.FRONTEND_SPECIALIST: 25},
    "css": {P.FRONTEND_SPECIALIST: 20},
    "scss": {P.FRONTEND_SPECIALIST: 20},
    "tailwind": {P.FRONTEND_SPECIALIST: 20},
    # data science: machine learning
    "sklearn": {P.DATA_SCIENTIST: 30},
    "tensorflow": {P.DATA_SCIENTIST: 30},
    "pytorch": {P.DATA_SCIENTIST: 30},
    "keras": {P.DATA_SCIENTIST: 30},
    "model": {P.DATA_SCIENTIST: 25},
    "predict": {P.DATA_SCIENTIST: 25},
    "train": {P.DATA_SCIENTIST: 25},
    "fit": {P.DATA_SCIENTIST: 25},
    # data science: data processing
    "pandas": {P.DATA_SCIENTIST: 30},
    "numpy": {P.DATA_SCIENTIST: 30},
    "dataframe": {P.DATA_SCIENTIST: 25},
    "array": {P.DATA_SCIENTIST: 20},
    "preprocessing": {P.DATA_SCIENTIST: 25},
    "feature": {P.DATA_SCIENTIST: 25},
    # data science: recommendation
    "recommendation": {P.DATA_SCIENTIST: 30, P.BUSINESS_ANALYST: 20},
    "collaborative": {P.DATA_SCIENTIST: 25},
    "content-based": {P.DATA_SCIENTIST: 25},
    "embedding": {P.DATA_SCIENTIST: 25},
    "similarity": {P.DATA_SCIENTIST: 25},
    # devops: Docker
    "FROM": {P.DEVOPS_ENGINEER: 30},
    "RUN": {P.DEVOPS_ENGINEER: 25},
    "COPY": {P.DEVOPS_ENGINEER: 25},
    "ENV": {P.DEVOPS_ENGINEER: 25},
    "EXPOSE": {P.DEVOPS_ENGINEER: 25},
    "docker": {P.DEVOPS_ENGINEER: 30},
    "dockerfile": {P.DEVOPS_ENGINEER: 30},
    "docker-compose": {P.DEVOPS_ENGINEER: 30},
    # devops: Kubernetes
    "kubernetes": {P.DEVOPS_ENGINEER: 30},
    "kubectl": {P.DEVOPS_ENGINEER: 25},
    "deployment": {P.DEVOPS_ENGINEER: 25},
    "ingress": {P.DEVOPS_ENGINEER: 25},
    "namespace": {P.DEVOPS_ENGINEER: 25},
    # devops: CI/CD
    "jenkins": {P.DEVOPS_ENGINEER: 30},
    "pipeline": {P.DEVOPS_ENGINEER: 30},
    "build": {P.DEVOPS_ENGINEER: 20},
    "deploy": {P.DEVOPS_ENGINEER: 25},
    "github-actions": {P.DEVOPS_ENGINEER: 25},
    # devops: monitoring
    "prometheus": {P.DEVOPS_ENGINEER: 30},
    "grafana": {P.DEVOPS_ENGINEER: 30},
    "loki": {P.DEVOPS_ENGINEER: 25},
    "promtail": {P.DEVOPS_ENGINEER: 25},
    "metrics": {P.DEVOPS_ENGINEER: 25, P.PERFORMANCE_TUNER: 20},
    "logging": {P.DEVOPS_ENGINEER: 25},
    # devops: Nginx
    "nginx": {P.DEVOPS_ENGINEER: 30},
    "proxy_pass": {P.DEVOPS_ENGINEER: 25},
    "upstream": {P.DEVOPS_ENGINEER: 25},
    "location": {P.DEVOPS_ENGINEER: 20},
    # architecture
    "abstract": {P.ARCHITECT: 25},
    "pattern": {P.ARCHITECT: 25},
    "design": {P.ARCHITECT: 20},
    "architecture": {P.ARCHITECT: 30},
    "dependency": {P.ARCHITECT: 25},
    "injection": {P.ARCHITECT: 25},
    # business logic
    "validate": {P.BUSINESS_ANALYST: 25},
    "calculate": {P.BUSINESS_ANALYST: 25},
    "process": {P.BUSINESS_ANALYST: 20},
    "business": {P.BUSINESS_ANALYST: 20},
    "workflow": {P.BUSINESS_ANALYST: 25},
    "rule": {P.BUSINESS_ANALYST: 25},
    # tests
    "@Test": {P.QUALITY_COACH: 30},
    "@Mock": {P.QUALITY_COACH: 25},
    "assert": {P.QUALITY_COACH: 25},
    "verify": {P.QUALITY_COACH: 25},
    "expect": {P.QUALITY_COACH: 25},
    "jest": {P.QUALITY_COACH: 25, P.FRONTEND_SPECIALIST: 20},
    "junit": {P.QUALITY_COACH: 25, P.BACKEND_SPECIALIST: 15},
    "pytest": {P.QUALITY_COACH: 25, P.DATA_SCIENTIST: 15},
}

# ============ Complexity patterns (case-insensitive, across lines) ============
DEFAULT_COMPLEXITY_WEIGHTS: Dict[str, Dict[Persona, int]] = {
    # branching
    r"if.*else.*if": {P.BUSINESS_ANALYST: 15, P.QUALITY_COACH: 10, P.BACKEND_SPECIALIST: 10},
    r"switch.*case": {P.BUSINESS_ANALYST: 15, P.QUALITY_COACH: 10, P.BACKEND_SPECIALIST: 10},
    # nested loops
    r"for.*for": {P.PERFORMANCE_TUNER: 15, P.QUALITY_COACH: 10, P.DATA_SCIENTIST: 10},
    r"while.*while": {P.PERFORMANCE_TUNER: 15, P.QUALITY_COACH: 10},
    # error handling
    r"try.*catch": {P.ARCHITECT: 15, P.QUALITY_COACH: 10, P.BACKEND_SPECIALIST: 10},
    r"throw.*Exception": {P.ARCHITECT: 15, P.BACKEND_SPECIALIST: 10},
    # asynchronous flow
    r"async.*await": {P.PERFORMANCE_TUNER: 15, P.FRONTEND_SPECIALIST: 12, P.BACKEND_SPECIALIST: 10},
    # nested queries
    r"JOIN.*JOIN": {P.DATA_GUARDIAN: 15, P.PERFORMANCE_TUNER: 12},
    # React state management
    r"useState.*useEffect": {P.FRONTEND_SPECIALIST: 15, P.QUALITY_COACH: 10},
}

# ============ Domain keyword sets ============
KEYWORD_SET_PERSONAS: Dict[str, Persona] = {
    "security": P.SECURITY_AUDITOR,
    "performance": P.PERFORMANCE_TUNER,
    "database": P.DATA_GUARDIAN,
    "frontend": P.FRONTEND_SPECIALIST,
    "backend": P.BACKEND_SPECIALIST,
    "devops": P.DEVOPS_ENGINEER,
    "data_science": P.DATA_SCIENTIST,
}

DEFAULT_KEYWORD_SETS: Dict[str, List[str]] = {
    "security": [
        "password", "token", "secret", "key", "auth", "login", "session",
        "encrypt", "decrypt", "hash", "salt", "jwt", "oauth", "security",
        "csrf", "xss", "cors", "ssl", "tls", "certificate", "firewall",
    ],
    "performance": [
        "cache", "async", "parallel", "concurrent", "thread", "pool",
        "optimization", "performance", "memory", "cpu", "latency",
        "throughput", "scalability", "bottleneck", "profiling", "benchmark",
    ],
    "database": [
        "sql", "query", "database", "table", "index", "transaction",
        "commit", "rollback", "lock", "constraint", "foreign", "primary",
        "postgresql", "redis", "mongodb", "elasticsearch", "weaviate",
    ],
    "frontend": [
        "react", "vue", "angular", "javascript", "typescript", "html", "css",
        "component", "props", "state", "hook", "dom", "event", "render",
        "jsx", "tsx", "scss", "sass", "webpack", "vite", "babel",
    ],
    "backend": [
        "spring", "boot", "java", "python", "fastapi", "api", "rest",
        "controller", "service", "repository", "entity", "dto", "model",
        "endpoint", "request", "response", "middleware", "filter",
    ],
    "devops": [
        "docker", "kubernetes", "jenkins", "nginx", "prometheus", "grafana",
        "deployment", "pipeline", "ci", "cd", "monitoring", "logging",
        "infrastructure", "terraform", "ansible", "helm", "istio",
    ],
    "data_science": [
        "pandas", "numpy", "sklearn", "tensorflow", "pytorch", "keras",
        "model", "training", "prediction", "feature", "dataset", "ml",
        "ai", "recommendation", "embedding", "vector", "similarity",
        "clustering", "classification", "regression", "deep", "learning",
    ],
}


def _freeze_weights(trigger: str, weights: Mapping[Any, Any]) -> Mapping[Persona, int]:
    """Validate a persona->weight mapping and return a read-only copy."""
    if not isinstance(weights, Mapping) or not weights:
        raise ValueError(f"Rule '{trigger}' has no persona weights")

    frozen: Dict[Persona, int] = {}
    for key, weight in weights.items():
        persona = key if isinstance(key, Persona) else Persona.from_key(key)
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise ValueError(f"Rule '{trigger}': weight for {persona.value} must be an integer")
        if weight <= 0:
            raise ValueError(f"Rule '{trigger}': weight for {persona.value} must be positive")
        frozen[persona] = weight
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class WeightRule:
    """A literal trigger and the weights it adds when it matches."""
    trigger: str
    weights: Mapping[Persona, int]

    @classmethod
    def build(cls, trigger: str, weights: Mapping[Any, Any]) -> "WeightRule":
        if not isinstance(trigger, str) or not trigger:
            raise ValueError("Rule trigger must be a non-empty string")
        return cls(trigger=trigger, weights=_freeze_weights(trigger, weights))


@dataclass(frozen=True)
class ComplexityRule:
    """A precompiled regex and the weights it adds on the first match."""
    source: str
    pattern: re.Pattern
    weights: Mapping[Persona, int]

    @classmethod
    def build(cls, source: str, weights: Mapping[Any, Any]) -> "ComplexityRule":
        try:
            pattern = re.compile(source, COMPLEXITY_FLAGS)
        except re.error as e:
            raise ValueError(f"Invalid complexity pattern '{source}': {e}") from e
        return cls(source=source, pattern=pattern, weights=_freeze_weights(source, weights))

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


@dataclass(frozen=True)
class KeywordSet:
    """Domain keyword set whose hits add a capped bonus to one persona."""
    name: str
    persona: Persona
    keywords: FrozenSet[str]

    @classmethod
    def build(cls, name: str, persona: Persona, keywords: Iterable[str]) -> "KeywordSet":
        cleaned = frozenset(str(k).lower() for k in keywords if str(k).strip())
        if not cleaned:
            raise ValueError(f"Keyword set '{name}' cannot be empty")
        return cls(name=name, persona=persona, keywords=cleaned)

    def count_matches(self, tokens: Iterable[str]) -> int:
        """Number of tokens containing at least one keyword."""
        return sum(1 for token in tokens if any(keyword in token for keyword in self.keywords))

    def bonus(self, tokens: Iterable[str]) -> int:
        return min(self.count_matches(tokens) * KEYWORD_SET_STEP, KEYWORD_SET_CAP)


def _require_mapping(name: str, section: Any) -> Mapping[str, Any]:
    if not isinstance(section, Mapping):
        raise ValueError(f"Section '{name}' must be a mapping")
    return section


def _build_rules(name: str, section: Any) -> Tuple[WeightRule, ...]:
    section = _require_mapping(name, section)
    return tuple(WeightRule.build(trigger, weights) for trigger, weights in section.items())


def _build_complexity_rules(name: str, section: Any) -> Tuple[ComplexityRule, ...]:
    section = _require_mapping(name, section)
    return tuple(ComplexityRule.build(source, weights) for source, weights in section.items())


def _build_keyword_sets(name: str, section: Any) -> Tuple[KeywordSet, ...]:
    section = _require_mapping(name, section)
    keyword_sets = []
    for set_name, value in section.items():
        if isinstance(value, Mapping):
            persona = Persona.from_key(value.get("persona", ""))
            keywords = value.get("keywords") or []
        else:
            if set_name not in KEYWORD_SET_PERSONAS:
                raise ValueError(f"Unknown keyword set '{set_name}'; give it an explicit persona")
            persona = KEYWORD_SET_PERSONAS[set_name]
            keywords = value or []
        if isinstance(keywords, (str, bytes)) or not isinstance(keywords, Iterable):
            raise ValueError(f"Keyword set '{set_name}' must list its keywords")
        keyword_sets.append(KeywordSet.build(set_name, persona, keywords))
    return tuple(keyword_sets)


@dataclass(frozen=True)
class WeightTable:
    """
    Immutable scoring knowledge.

    Built once at startup, either from the module defaults or from an
    operator-supplied YAML document, and shared by every scorer and selector.
    """
    path_rules: Tuple[WeightRule, ...]
    extension_rules: Tuple[WeightRule, ...]
    keyword_rules: Tuple[WeightRule, ...]
    complexity_rules: Tuple[ComplexityRule, ...]
    keyword_sets: Tuple[KeywordSet, ...]
    selection_threshold: int = SELECTION_THRESHOLD
    mention_threshold: int = MENTION_THRESHOLD

    def __post_init__(self):
        """데이터 검증"""
        errors = []
        for name in ("selection_threshold", "mention_threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be an integer")
            elif not 0 <= value <= MAX_SCORE:
                errors.append(f"{name} must be between 0 and {MAX_SCORE}")
        if not errors and self.mention_threshold <= self.selection_threshold:
            errors.append("mention_threshold must be greater than selection_threshold")
        if errors:
            raise ValueError(f"Weight table validation failed: {'; '.join(errors)}")

    @classmethod
    def default(cls) -> "WeightTable":
        """Table built from the module defaults."""
        return _DEFAULT_TABLE

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]], base: Optional["WeightTable"] = None) -> "WeightTable":
        """
        Build a table from a mapping of sections.

        Args:
            data: Mapping with any of path_rules, extension_rules,
                keyword_rules, complexity_rules, keyword_sets, thresholds
            base: Table supplying sections missing from ``data``
                (defaults to the built-in table)

        Returns:
            New WeightTable
        """
        base = base or cls.default()
        data = _require_mapping("weight table", data or {})

        unknown = set(data) - {
            "path_rules", "extension_rules", "keyword_rules",
            "complexity_rules", "keyword_sets", "thresholds",
        }
        if unknown:
            raise ValueError(f"Unknown weight table sections: {', '.join(sorted(unknown))}")

        thresholds = _require_mapping("thresholds", data.get("thresholds") or {})

        def section(name, builder):
            return builder(name, data[name]) if name in data else getattr(base, name)

        return cls(
            path_rules=section("path_rules", _build_rules),
            extension_rules=section("extension_rules", _build_rules),
            keyword_rules=section("keyword_rules", _build_rules),
            complexity_rules=section("complexity_rules", _build_complexity_rules),
            keyword_sets=section("keyword_sets", _build_keyword_sets),
            selection_threshold=thresholds.get("selection", base.selection_threshold),
            mention_threshold=thresholds.get("mention", base.mention_threshold),
        )

    @classmethod
    def from_yaml(cls, path: str, base: Optional["WeightTable"] = None) -> "WeightTable":
        """Load a table from a YAML file."""
        weights_file = Path(path)
        if not weights_file.exists():
            raise FileNotFoundError(f"Weights file not found: {path}")

        with open(weights_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, Mapping):
            raise ValueError(f"Weights file must contain a mapping: {path}")

        table = cls.from_dict(data, base=base)
        logger.info(f"Loaded persona weight table from {path}")
        return table

    def with_thresholds(self, selection: int, mention: int) -> "WeightTable":
        """Copy of this table with new thresholds."""
        return replace(self, selection_threshold=selection, mention_threshold=mention)

    def rule_counts(self) -> Dict[str, int]:
        return {
            "path_rules": len(self.path_rules),
            "extension_rules": len(self.extension_rules),
            "keyword_rules": len(self.keyword_rules),
            "complexity_rules": len(self.complexity_rules),
            "keyword_sets": len(self.keyword_sets),
        }


_DEFAULT_TABLE = WeightTable(
    path_rules=_build_rules("path_rules", DEFAULT_PATH_WEIGHTS),
    extension_rules=_build_rules("extension_rules", DEFAULT_EXTENSION_WEIGHTS),
    keyword_rules=_build_rules("keyword_rules", DEFAULT_KEYWORD_WEIGHTS),
    complexity_rules=_build_complexity_rules("complexity_rules", DEFAULT_COMPLEXITY_WEIGHTS),
    keyword_sets=_build_keyword_sets("keyword_sets", DEFAULT_KEYWORD_SETS),
)
