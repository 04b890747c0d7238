"""Rule-based threat scoring."""

from phish_triage.scoring.fusion import LEVEL_SUMMARIES, compute_threat_assessment, map_score_to_level
from phish_triage.scoring.models import DEFAULT_WEIGHTS, Indicator, RuleSet, ThreatAssessment
from phish_triage.scoring.rules import DEFAULT_RULE_TABLE, ScoringRule

__all__ = [
    "DEFAULT_RULE_TABLE",
    "DEFAULT_WEIGHTS",
    "Indicator",
    "LEVEL_SUMMARIES",
    "RuleSet",
    "ScoringRule",
    "ThreatAssessment",
    "compute_threat_assessment",
    "map_score_to_level",
]
