#!/usr/bin/env python3
"""
Scoring Module - oracle-backed candidate scoring.

Public API:
- ScoringService: Scores one candidate against one job via the oracle
- CandidateScore / ScoreBreakdown / MatchStatus: Score data structures
- ThresholdPolicy / classify_status: Pluggable status bucketing

- models.py: Data structures
- thresholds.py: Status classification policy
- service.py: ScoringService and reply validation
"""

from core.scorer.models import CandidateScore, MatchStatus, ScoreBreakdown
from core.scorer.thresholds import ThresholdPolicy, classify_status
from core.scorer.service import ScoringService, build_score

__all__ = [
    'ScoringService',
    'build_score',
    'CandidateScore',
    'MatchStatus',
    'ScoreBreakdown',
    'ThresholdPolicy',
    'classify_status',
]
