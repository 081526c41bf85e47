#!/usr/bin/env python3
"""
Threshold Policy - maps an overall score onto a MatchStatus bucket.

The cut-offs are configuration, not constants: the oracle's own status
judgement is never trusted to be consistent with them.
"""

from dataclasses import dataclass

from core.config_loader import ThresholdConfig
from core.exceptions import ValidationError
from core.scorer.models import MatchStatus


@dataclass(frozen=True)
class ThresholdPolicy:
    top_fit: float = 80.0
    borderline: float = 60.0

    def __post_init__(self):
        if not (0.0 <= self.borderline <= self.top_fit <= 100.0):
            raise ValidationError(
                f"Invalid threshold policy: borderline={self.borderline}, top_fit={self.top_fit}"
            )

    @classmethod
    def from_config(cls, config: ThresholdConfig) -> "ThresholdPolicy":
        return cls(top_fit=config.top_fit, borderline=config.borderline)

    def classify(self, overall_score: float) -> MatchStatus:
        return classify_status(overall_score, self)


def classify_status(overall_score: float, policy: ThresholdPolicy) -> MatchStatus:
    """Pure status derivation: >= top_fit, then >= borderline, else not suitable."""
    if overall_score >= policy.top_fit:
        return MatchStatus.TOP_FIT
    if overall_score >= policy.borderline:
        return MatchStatus.BORDERLINE
    return MatchStatus.NOT_SUITABLE
