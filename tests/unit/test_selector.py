"""
Unit tests for PersonaSelector.
"""

import pytest

from persona_reviewer.models.persona import Persona
from persona_reviewer.review.analyzer import empty_scores
from persona_reviewer.review.selector import PersonaSelector
from persona_reviewer.review.weights import WeightTable


def scores_with(**values):
    scores = empty_scores()
    for key, value in values.items():
        scores[Persona.from_key(key)] = value
    return scores


class TestPersonaSelector:
    """Unit tests for the selection policy."""

    def setup_method(self):
        self.selector = PersonaSelector()

    def test_highest_score_wins(self):
        selection = self.selector.select(scores_with(
            security_auditor=70,
            backend_specialist=65,
            business_analyst=25,
        ))

        assert selection.primary is Persona.SECURITY_AUDITOR
        assert selection.primary_score == 70
        assert selection.mentions == frozenset({Persona.BACKEND_SPECIALIST})

    def test_all_zero_falls_back_to_general_reviewer(self):
        selection = self.selector.select(empty_scores())

        assert selection.primary is Persona.GENERAL_REVIEWER
        assert selection.primary_score == 0
        assert selection.mentions == frozenset()
        assert selection.is_fallback

    def test_below_threshold_falls_back(self):
        selection = self.selector.select(scores_with(data_guardian=39))

        assert selection.primary is Persona.GENERAL_REVIEWER
        assert selection.primary_score == 0

    def test_threshold_is_inclusive(self):
        selection = self.selector.select(scores_with(data_guardian=40))

        assert selection.primary is Persona.DATA_GUARDIAN
        assert selection.primary_score == 40

    def test_tie_goes_to_declaration_order(self):
        selection = self.selector.select(scores_with(architect=50, security_auditor=50))

        assert selection.primary is Persona.SECURITY_AUDITOR
        assert selection.mentions == frozenset()

    def test_mentions_exclude_primary(self):
        selection = self.selector.select(scores_with(
            frontend_specialist=100,
            quality_coach=60,
            performance_tuner=59,
            architect=80,
        ))

        assert selection.primary is Persona.FRONTEND_SPECIALIST
        assert selection.mentions == frozenset({Persona.QUALITY_COACH, Persona.ARCHITECT})
        assert Persona.FRONTEND_SPECIALIST not in selection.mentions

    def test_missing_personas_count_as_zero(self):
        selection = self.selector.select({Persona.DEVOPS_ENGINEER: 45})

        assert selection.primary is Persona.DEVOPS_ENGINEER
        assert selection.primary_score == 45

    def test_general_reviewer_can_win_outright(self):
        selection = self.selector.select(scores_with(general_reviewer=90, architect=61))

        assert selection.primary is Persona.GENERAL_REVIEWER
        assert selection.primary_score == 90
        assert selection.mentions == frozenset({Persona.ARCHITECT})

    @pytest.mark.parametrize("score,expected", [
        (29, Persona.GENERAL_REVIEWER),
        (30, Persona.ARCHITECT),
    ])
    def test_custom_thresholds(self, score, expected):
        selector = PersonaSelector(WeightTable.default().with_thresholds(30, 50))
        selection = selector.select(scores_with(architect=score))

        assert selection.primary is expected

    def test_custom_mention_threshold(self):
        selector = PersonaSelector(WeightTable.default().with_thresholds(30, 50))
        selection = selector.select(scores_with(architect=70, quality_coach=50))

        assert selection.mentions == frozenset({Persona.QUALITY_COACH})
