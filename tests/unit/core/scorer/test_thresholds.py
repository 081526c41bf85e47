"""
Unit tests for status classification.
"""
import unittest

import pytest

from core.config_loader import ThresholdConfig
from core.exceptions import ValidationError
from core.scorer import MatchStatus, ThresholdPolicy, classify_status


class TestClassifyStatus(unittest.TestCase):
    def setUp(self):
        self.policy = ThresholdPolicy(top_fit=80, borderline=60)

    def test_default_buckets(self):
        self.assertEqual(classify_status(85, self.policy), MatchStatus.TOP_FIT)
        self.assertEqual(classify_status(65, self.policy), MatchStatus.BORDERLINE)
        self.assertEqual(classify_status(10, self.policy), MatchStatus.NOT_SUITABLE)

    def test_boundaries_are_inclusive(self):
        self.assertEqual(classify_status(80, self.policy), MatchStatus.TOP_FIT)
        self.assertEqual(classify_status(79.9, self.policy), MatchStatus.BORDERLINE)
        self.assertEqual(classify_status(60, self.policy), MatchStatus.BORDERLINE)
        self.assertEqual(classify_status(59.9, self.policy), MatchStatus.NOT_SUITABLE)

    def test_custom_policy(self):
        strict = ThresholdPolicy(top_fit=90, borderline=75)
        self.assertEqual(strict.classify(85), MatchStatus.BORDERLINE)
        self.assertEqual(strict.classify(70), MatchStatus.NOT_SUITABLE)

    def test_from_config(self):
        policy = ThresholdPolicy.from_config(ThresholdConfig(top_fit=70, borderline=50))
        self.assertEqual(policy.classify(72), MatchStatus.TOP_FIT)


@pytest.mark.parametrize("top_fit,borderline", [(60, 80), (101, 50), (80, -1)])
def test_invalid_policies_rejected(top_fit, borderline):
    with pytest.raises(ValidationError):
        ThresholdPolicy(top_fit=top_fit, borderline=borderline)
