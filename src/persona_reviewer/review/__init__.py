"""
Persona Scoring

This module provides diff scoring, persona selection and the weight
table both are driven by.
"""

from .analyzer import DiffScorer, ScoreMap, empty_scores
from .selector import PersonaSelector
from .weights import WeightTable, WeightRule, ComplexityRule, KeywordSet

__all__ = [
    'DiffScorer',
    'ScoreMap',
    'empty_scores',
    'PersonaSelector',
    'WeightTable',
    'WeightRule',
    'ComplexityRule',
    'KeywordSet',
]
