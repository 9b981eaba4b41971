"""
Persona Review API

Main interface that turns the diffs of a merge request into a selected
reviewer persona and a ready-to-send review prompt, and decorates the
generated review with the persona header.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .config import AppConfig, ConfigManager
from .llm.prompts import PromptComposer
from .models.diff import DiffRecord, records_from_payload
from .models.persona import Persona
from .models.selection import PersonaSelection
from .review.analyzer import DiffScorer, ScoreMap
from .review.selector import PersonaSelector
from .review.weights import WeightTable


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReviewPlan:
    """Everything the LLM-call layer needs for one merge request."""
    mode: str
    prompt: str
    file_count: int
    selection: Optional[PersonaSelection] = None
    scores: Optional[ScoreMap] = None
    summary: str = ""

    @property
    def persona(self) -> Persona:
        """Persona shown in the review header."""
        if self.selection is None:
            return Persona.GENERAL_REVIEWER
        return self.selection.primary

    @property
    def has_changes(self) -> bool:
        return self.file_count > 0


class PersonaReviewAPI:
    """
    Persona review interface.

    Orchestrates the review preparation:
    1. Score every persona against the diffs
    2. Select the primary persona and mentions
    3. Compose the prompt for the text-generation backend
    4. Format the generated review with the persona header
    """

    def __init__(self, config: Optional[AppConfig] = None, weight_table: Optional[WeightTable] = None):
        """
        Initialize persona review API.

        Args:
            config: Optional configuration object (defaults to environment)
            weight_table: Optional weight table overriding the configured one
        """
        self.config_manager = ConfigManager(config)
        self.config = self.config_manager.config

        logger.info("Initializing persona review components...")

        self.weight_table = weight_table or self.config.scoring.build_weight_table()
        self.scorer = DiffScorer(self.weight_table, language=self.config.review.language)
        self.selector = PersonaSelector(self.weight_table)
        self.composer = PromptComposer(
            language=self.config.review.language,
            max_file_list=self.config.review.max_file_list,
            system_prompt=self.config.review.system_prompt,
        )

        logger.info(f"Persona review API initialized (mode: {self.config.review.mode})")

    def prepare_review(self, diffs: Optional[Sequence[DiffRecord]]) -> ReviewPlan:
        """
        Prepare the review prompt for a merge request.

        Args:
            diffs: Changed files of the merge request

        Returns:
            ReviewPlan with the prompt and, in persona mode, the selection
        """
        diffs = list(diffs or [])

        if not diffs:
            logger.info("No changes to review")
            return ReviewPlan(
                mode=self.config.review.mode,
                prompt=self.composer.no_changes_message(),
                file_count=0,
            )

        if self.config.review.is_integrated_mode:
            logger.info(f"Preparing integrated review for {len(diffs)} files")
            return ReviewPlan(
                mode="integrated",
                prompt=self.composer.compose_integrated(diffs),
                file_count=len(diffs),
            )

        scores = self.scorer.score(diffs)
        selection = self.selector.select(scores)
        summary = self.scorer.summarize(scores)

        logger.info(
            f"Selected persona: {selection.primary.display_name}, "
            f"score: {selection.primary_score}"
        )
        if selection.mentions:
            logger.info(
                "Also worth a look: "
                + ", ".join(p.display_name for p in selection.ordered_mentions)
            )

        return ReviewPlan(
            mode="persona",
            prompt=self.composer.compose(selection.primary, diffs),
            file_count=len(diffs),
            selection=selection,
            scores=scores,
            summary=summary,
        )

    def prepare_review_from_payload(self, payload: Optional[List[Dict[str, Any]]]) -> ReviewPlan:
        """
        Prepare the review from raw GitLab diff dictionaries.

        Raises:
            pydantic.ValidationError: If a diff entry is malformed
        """
        return self.prepare_review(records_from_payload(payload))

    def format_review(self, plan: ReviewPlan, review_content: str) -> str:
        """
        Decorate generated review text with the persona header.

        Args:
            plan: Plan the review was generated from
            review_content: Text returned by the generation backend

        Returns:
            Final review body
        """
        persona = plan.persona
        korean = self.config.review.language == "korean"

        title = "AI 코드 리뷰" if korean else "AI Code Review"
        body = f"## {persona.emoji} {persona.display_name} {title}\n\n{review_content}"

        if plan.selection is not None and plan.selection.mentions:
            names = ", ".join(
                f"{p.emoji} {p.display_name}" for p in plan.selection.ordered_mentions
            )
            label = "추가 점검 권장" if korean else "Also worth a look"
            body += f"\n\n> {label}: {names}"

        return body

    def status(self) -> Dict[str, Any]:
        """Current engine settings."""
        return {
            "mode": self.config.review.mode,
            "language": self.config.review.language,
            "selection_threshold": self.weight_table.selection_threshold,
            "mention_threshold": self.weight_table.mention_threshold,
            "rules": self.weight_table.rule_counts(),
            "prompt": self.composer.prompt_status(),
        }
