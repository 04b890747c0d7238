"""Rule evaluation and score-to-level mapping."""

from __future__ import annotations

import logging

from phish_triage.domain.email.models import Email
from phish_triage.scoring.models import Indicator, RuleSet, ThreatAssessment, ThreatLevel
from phish_triage.scoring.rules import DEFAULT_RULE_TABLE, ScoringRule

logger = logging.getLogger(__name__)

HIGH_THRESHOLD = 50
MEDIUM_THRESHOLD = 25

LEVEL_SUMMARIES: dict[str, str] = {
    "High": "This email shows multiple high-risk indicators consistent with phishing or malicious intent.",
    "Medium": "This email shows some suspicious characteristics that warrant caution.",
    "Low": "This email shows minimal suspicious indicators but should still be verified.",
}


def map_score_to_level(score: int) -> ThreatLevel:
    if score >= HIGH_THRESHOLD:
        return "High"
    if score >= MEDIUM_THRESHOLD:
        return "Medium"
    return "Low"


def compute_threat_assessment(
    email: Email,
    rules: RuleSet | None = None,
    table: tuple[ScoringRule, ...] = DEFAULT_RULE_TABLE,
) -> ThreatAssessment:
    """Sum the weight of every triggered rule and map the total to a threat level."""

    rule_set = rules or RuleSet()
    score = 0
    indicators: list[Indicator] = []
    for rule in table:
        hits = rule.matcher(email, rule_set)
        if rule.once:
            hits = hits[:1]
        weight = rule_set.weight(rule.name)
        for hit in hits:
            score += weight
            indicators.append(
                Indicator(
                    category=rule.category,
                    description=hit.description,
                    severity=rule.severity,
                    details=hit.details,
                )
            )
        if hits:
            logger.debug("rule %s matched %d time(s), weight %d", rule.name, len(hits), weight)

    level = map_score_to_level(score)
    return ThreatAssessment(level=level, score=score, indicators=tuple(indicators), summary=LEVEL_SUMMARIES[level])
