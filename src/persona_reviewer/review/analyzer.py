"""
Diff Scorer

Analyzes merge request diffs and scores how relevant each reviewer persona
is to the change, using the rules held by a WeightTable.
"""

import logging
from typing import Dict, Iterable, Mapping, Optional

from ..models.diff import DiffRecord
from ..models.persona import Persona
from .weights import MAX_SCORE, WeightTable


logger = logging.getLogger(__name__)


ScoreMap = Dict[Persona, int]


def empty_scores() -> ScoreMap:
    """Score map with every persona at zero."""
    return {persona: 0 for persona in Persona}


class DiffScorer:
    """
    Scores reviewer personas against a list of diffs.

    Looks at file paths, file extensions, diff content keywords, domain
    keyword sets and complexity patterns, accumulates the weights across
    all diffs and caps each persona at 100.
    """

    def __init__(self, weight_table: Optional[WeightTable] = None, language: str = "korean"):
        """
        Initialize diff scorer.

        Args:
            weight_table: Scoring rules (defaults to the built-in table)
            language: Language for score summaries ("korean" or "english")
        """
        self.weight_table = weight_table or WeightTable.default()
        self.language = language

    def score(self, diffs: Optional[Iterable[DiffRecord]]) -> ScoreMap:
        """
        Score every persona for the given diffs.

        Args:
            diffs: Changed files of a merge request (may be None or empty)

        Returns:
            Mapping of every persona to a score in [0, 100]
        """
        scores = empty_scores()

        if not diffs:
            logger.debug("No diffs to analyze, using default persona scores")
            return scores

        diffs = list(diffs)
        logger.debug(f"Scoring personas for {len(diffs)} files")

        for diff in diffs:
            self._score_single_diff(diff, scores)

        self._clamp_scores(scores)

        logger.debug(f"Final persona scores: {self.summarize(scores)}")
        return scores

    def _score_single_diff(self, diff: DiffRecord, scores: ScoreMap) -> None:
        """Add the contributions of one diff to the running totals."""
        file_path = diff.effective_path
        if not file_path:
            return

        logger.debug(f"Analyzing file: {file_path}")

        self._score_file_path(file_path, scores)
        self._score_file_extension(file_path, scores)

        if diff.has_patch:
            lower_content = diff.patch_text.lower()
            self._score_keywords(lower_content, scores)
            self._score_keyword_sets(lower_content, scores)
            self._score_complexity(diff.patch_text, scores)

    def _score_file_path(self, file_path: str, scores: ScoreMap) -> None:
        lower_path = file_path.lower()
        for rule in self.weight_table.path_rules:
            if rule.trigger.lower() in lower_path:
                self._apply(rule.weights, scores, f"path '{rule.trigger}'")

    def _score_file_extension(self, file_path: str, scores: ScoreMap) -> None:
        for rule in self.weight_table.extension_rules:
            if file_path.endswith(rule.trigger):
                self._apply(rule.weights, scores, f"extension '{rule.trigger}'")

    def _score_keywords(self, lower_content: str, scores: ScoreMap) -> None:
        for rule in self.weight_table.keyword_rules:
            if rule.trigger.lower() in lower_content:
                self._apply(rule.weights, scores, f"keyword '{rule.trigger}'")

    def _score_keyword_sets(self, lower_content: str, scores: ScoreMap) -> None:
        tokens = lower_content.split()
        for keyword_set in self.weight_table.keyword_sets:
            bonus = keyword_set.bonus(tokens)
            if bonus > 0:
                scores[keyword_set.persona] += bonus
                logger.debug(f"Keyword set '{keyword_set.name}' matched: {keyword_set.persona.value} +{bonus}")

    def _score_complexity(self, content: str, scores: ScoreMap) -> None:
        # one hit per pattern per diff, however often it occurs
        for rule in self.weight_table.complexity_rules:
            if rule.matches(content):
                self._apply(rule.weights, scores, f"complexity '{rule.source}'")

    def _apply(self, weights: Mapping[Persona, int], scores: ScoreMap, reason: str) -> None:
        for persona, weight in weights.items():
            scores[persona] += weight
            logger.debug(f"Matched {reason}: {persona.value} +{weight}")

    def _clamp_scores(self, scores: ScoreMap) -> None:
        for persona, value in scores.items():
            scores[persona] = max(0, min(value, MAX_SCORE))

    def summarize(self, scores: Mapping[Persona, int]) -> str:
        """
        Summarize non-zero scores, highest first.

        Args:
            scores: Persona score map

        Returns:
            e.g. "Security Auditor: 70점, Backend Specialist: 65점"
        """
        unit = "점" if self.language == "korean" else " pts"

        ranked = sorted(
            (persona for persona in Persona if scores.get(persona, 0) > 0),
            key=lambda persona: (-scores[persona], persona.rank),
        )

        return ", ".join(f"{persona.display_name}: {scores[persona]}{unit}" for persona in ranked)
