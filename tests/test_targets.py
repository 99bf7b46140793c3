from __future__ import annotations

import unittest
from decimal import Decimal

from pocketledger.analytics.targets import (
    ContributionPolicy,
    classify_progress,
    progress_tone,
    recommendations,
    resolve_monthly_contribution,
    track_emergency_fund,
    track_target,
)
from pocketledger.domain.models import UNSET, ProgressStatus, TargetParameters, Value


class TrackTargetTests(unittest.TestCase):
    def test_quarter_of_the_way(self) -> None:
        progress = track_target(goal=10000, current_balance=2500, monthly_contribution=500)

        self.assertEqual(progress.amount_needed, Decimal("7500"))
        self.assertEqual(progress.percent_complete, Decimal("25"))
        self.assertEqual(progress.months_to_goal, 15)
        self.assertEqual(progress.status, ProgressStatus.STARTED)

    def test_goal_already_met(self) -> None:
        progress = track_target(goal=10000, current_balance=12000, monthly_contribution=500)

        self.assertEqual(progress.amount_needed, Decimal("0"))
        self.assertEqual(progress.percent_complete, Decimal("100"))
        self.assertEqual(progress.months_to_goal, 0)
        self.assertEqual(progress.status, ProgressStatus.COMPLETE)

    def test_months_round_up(self) -> None:
        progress = track_target(goal="1000", current_balance="0", monthly_contribution="300")

        self.assertEqual(progress.months_to_goal, 4)

    def test_zero_goal_is_safe(self) -> None:
        for balance in (0, 50, -10):
            for contribution in (0, 100, -5):
                progress = track_target(0, balance, contribution)
                self.assertEqual(progress.percent_complete, 0)
                self.assertEqual(progress.amount_needed, 0)

    def test_zero_contribution_is_safe(self) -> None:
        self.assertEqual(track_target(10000, 2500, 0).months_to_goal, 0)
        self.assertEqual(track_target(10000, 2500, -100).months_to_goal, 0)

    def test_percent_stays_within_bounds(self) -> None:
        goal = Decimal("800")
        for balance in ("0", "1", "399.99", "799.99", "800", "800.01", "5000"):
            progress = track_target(goal, balance, 100)
            self.assertGreaterEqual(progress.percent_complete, 0)
            self.assertLessEqual(progress.percent_complete, 100)
            self.assertEqual(progress.percent_complete == 100, Decimal(balance) >= goal)

    def test_negative_balance_reports_zero_percent(self) -> None:
        progress = track_target(1000, -200, 100)

        self.assertEqual(progress.percent_complete, 0)
        self.assertEqual(progress.amount_needed, Decimal("1200"))


class ClassifyProgressTests(unittest.TestCase):
    def test_thresholds(self) -> None:
        cases = [
            (150, ProgressStatus.COMPLETE),
            (100, ProgressStatus.COMPLETE),
            (99.9, ProgressStatus.NEAR),
            (75, ProgressStatus.NEAR),
            (74, ProgressStatus.HALFWAY),
            (50, ProgressStatus.HALFWAY),
            (25, ProgressStatus.STARTED),
            (24.99, ProgressStatus.BEGINNING),
            (0, ProgressStatus.BEGINNING),
            (-5, ProgressStatus.BEGINNING),
        ]
        for percent, expected in cases:
            self.assertEqual(classify_progress(percent), expected, percent)

    def test_tone(self) -> None:
        self.assertEqual(progress_tone(100), "success")
        self.assertEqual(progress_tone(50), "warning")
        self.assertEqual(progress_tone(10), "danger")


class EmergencyFundTests(unittest.TestCase):
    def test_saving_amount_overrides_net_balance(self) -> None:
        contribution = resolve_monthly_contribution(Value(Decimal("250")), Decimal("900"))

        self.assertEqual(contribution, Decimal("250"))

    def test_unset_saving_amount_follows_policy(self) -> None:
        self.assertEqual(resolve_monthly_contribution(UNSET, Decimal("900")), Decimal("900"))
        self.assertEqual(
            resolve_monthly_contribution(UNSET, Decimal("900"), ContributionPolicy.ZERO),
            Decimal("0"),
        )

    def test_uses_total_savings_as_current_balance(self) -> None:
        params = TargetParameters(
            emergency_fund_goal=Value(Decimal("6000")),
            total_savings=Decimal("1500"),
        )

        progress = track_emergency_fund(params, net_balance=Decimal("500"))

        self.assertEqual(progress.current_balance, Decimal("1500"))
        self.assertEqual(progress.amount_needed, Decimal("4500"))
        self.assertEqual(progress.months_to_goal, 9)

    def test_unset_goal_means_no_target(self) -> None:
        progress = track_emergency_fund(TargetParameters(total_savings=Decimal("300")), net_balance=Decimal("100"))

        self.assertEqual(progress.goal, 0)
        self.assertEqual(progress.percent_complete, 0)
        self.assertEqual(progress.amount_needed, 0)

    def test_negative_net_balance_gives_no_eta(self) -> None:
        params = TargetParameters(emergency_fund_goal=Value(Decimal("1000")))

        self.assertEqual(track_emergency_fund(params, net_balance=Decimal("-50")).months_to_goal, 0)


class RecommendationsTests(unittest.TestCase):
    def test_includes_eta_while_in_progress(self) -> None:
        tips = recommendations(track_target(1000, 100, 100))

        self.assertTrue(any("9 months" in tip for tip in tips))

    def test_single_message_once_complete(self) -> None:
        tips = recommendations(track_target(1000, 1000, 100))

        self.assertEqual(len(tips), 1)


if __name__ == "__main__":
    unittest.main()
