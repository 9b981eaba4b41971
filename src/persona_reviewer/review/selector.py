"""
Persona Selector

Chooses the primary reviewer persona from a score map and lists the
personas worth an extra look.
"""

import logging
from typing import Mapping, Optional

from ..models.persona import Persona
from ..models.selection import PersonaSelection
from .weights import WeightTable


logger = logging.getLogger(__name__)


class PersonaSelector:
    """
    Applies the selection policy to persona scores.

    The highest score wins, with ties going to the persona declared first.
    A winner below the selection threshold falls back to the general
    reviewer. Every other persona at or above the mention threshold is
    returned as a mention.
    """

    def __init__(self, weight_table: Optional[WeightTable] = None):
        table = weight_table or WeightTable.default()
        self.selection_threshold = table.selection_threshold
        self.mention_threshold = table.mention_threshold

    def select(self, scores: Mapping[Persona, int]) -> PersonaSelection:
        """
        Select the primary persona and mentions.

        Args:
            scores: Persona score map; missing personas count as 0

        Returns:
            PersonaSelection
        """
        candidate = max(Persona, key=lambda persona: (scores.get(persona, 0), -persona.rank))
        candidate_score = scores.get(candidate, 0)

        if candidate_score < self.selection_threshold:
            logger.debug(
                f"Best persona {candidate.value} scored {candidate_score}, "
                f"below threshold {self.selection_threshold}; using general reviewer"
            )
            primary = Persona.GENERAL_REVIEWER
            primary_score = scores.get(Persona.GENERAL_REVIEWER, 0)
        else:
            primary = candidate
            primary_score = candidate_score

        mentions = frozenset(
            persona for persona in Persona
            if persona is not primary and scores.get(persona, 0) >= self.mention_threshold
        )

        return PersonaSelection(primary=primary, primary_score=primary_score, mentions=mentions)
