"""Tests for petcare.scheduling.recurrence."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from dateutil import tz

from petcare.core.exceptions import InvalidRuleError, ValidationError
from petcare.enums import MedicationFrequency, RecurrenceType
from petcare.scheduling import RecurrenceRule, next_dose, next_occurrence, next_trigger
from petcare.scheduling.recurrence import repeat_interval_delta

pytestmark = pytest.mark.smoke

ANCHOR = datetime(2026, 1, 31, 8, 0, tzinfo=UTC)


class TestRecurrenceRule:
    def test_coerces_string_type(self):
        rule = RecurrenceRule("weekly", 2)
        assert rule.type is RecurrenceType.WEEKLY
        assert rule.interval == 2

    @pytest.mark.parametrize("interval", [0, -1, -30])
    def test_rejects_non_positive_interval(self, interval):
        with pytest.raises(InvalidRuleError) as exc:
            RecurrenceRule(RecurrenceType.DAILY, interval)
        assert exc.value.field == "interval"

    def test_rejects_non_integer_interval(self):
        with pytest.raises(InvalidRuleError):
            RecurrenceRule(RecurrenceType.DAILY, 1.5)
        with pytest.raises(InvalidRuleError):
            RecurrenceRule(RecurrenceType.DAILY, True)

    def test_rejects_unknown_type(self):
        with pytest.raises(InvalidRuleError):
            RecurrenceRule("fortnightly", 1)

    def test_invalid_rule_is_a_validation_error(self):
        with pytest.raises(ValidationError):
            RecurrenceRule(RecurrenceType.DAILY, 0)

    def test_is_hashable_and_frozen(self):
        rule = RecurrenceRule(RecurrenceType.DAILY)
        assert {rule: 1}[RecurrenceRule("daily", 1)] == 1
        with pytest.raises(AttributeError):
            rule.interval = 3


class TestNextOccurrence:
    def test_daily(self):
        assert next_occurrence(ANCHOR, RecurrenceRule("daily", 3)) == datetime(2026, 2, 3, 8, 0, tzinfo=UTC)

    def test_weekly(self):
        assert next_occurrence(ANCHOR, RecurrenceRule("weekly", 2)) == ANCHOR + timedelta(weeks=2)

    def test_monthly_clamps_to_month_end(self):
        assert next_occurrence(ANCHOR, RecurrenceRule("monthly", 1)) == datetime(2026, 2, 28, 8, 0, tzinfo=UTC)

    def test_monthly_leap_year(self):
        anchor = datetime(2028, 1, 31, tzinfo=UTC)
        assert next_occurrence(anchor, RecurrenceRule("monthly", 1)) == datetime(2028, 2, 29, tzinfo=UTC)

    def test_yearly_from_leap_day(self):
        anchor = datetime(2028, 2, 29, tzinfo=UTC)
        assert next_occurrence(anchor, RecurrenceRule("yearly", 1)) == datetime(2029, 2, 28, tzinfo=UTC)

    def test_custom_counts_days(self):
        assert next_occurrence(ANCHOR, RecurrenceRule("custom", 10)) == ANCHOR + timedelta(days=10)


class TestNextDose:
    @pytest.mark.parametrize(
        "frequency, delta",
        [
            (MedicationFrequency.ONCE_DAILY, timedelta(days=1)),
            (MedicationFrequency.TWICE_DAILY, timedelta(hours=12)),
            (MedicationFrequency.THREE_TIMES_DAILY, timedelta(hours=8)),
            (MedicationFrequency.EVERY_OTHER_DAY, timedelta(days=2)),
            (MedicationFrequency.WEEKLY, timedelta(weeks=1)),
        ],
    )
    def test_fixed_offsets(self, frequency, delta):
        assert next_dose(frequency, ANCHOR) == ANCHOR + delta

    def test_monthly_is_calendar_aware(self):
        assert next_dose(MedicationFrequency.MONTHLY, ANCHOR) == datetime(2026, 2, 28, 8, 0, tzinfo=UTC)

    @pytest.mark.parametrize("frequency", [MedicationFrequency.AS_NEEDED, MedicationFrequency.CUSTOM])
    def test_unscheduled_frequencies(self, frequency):
        assert next_dose(frequency, ANCHOR) is None


class TestNextTrigger:
    def test_future_schedule_is_returned_as_is(self):
        now = ANCHOR - timedelta(hours=1)
        assert next_trigger(ANCHOR, 3600, now) == ANCHOR

    def test_exact_hit_returns_now(self):
        now = ANCHOR + timedelta(days=2)
        assert next_trigger(ANCHOR, 86400, now) == now

    def test_three_days_ago_daily(self):
        scheduled = datetime(2026, 3, 8, 7, 0, tzinfo=UTC)
        now = datetime(2026, 3, 11, 9, 0, tzinfo=UTC)
        assert next_trigger(scheduled, 86400, now) == datetime(2026, 3, 12, 7, 0, tzinfo=UTC)

    def test_far_past_schedule_is_constant_time(self):
        scheduled = datetime(1970, 1, 1, tzinfo=UTC)
        now = datetime(2026, 3, 11, 9, 0, 0, 1, tzinfo=UTC)
        result = next_trigger(scheduled, 1, now)
        assert result == datetime(2026, 3, 11, 9, 0, 1, tzinfo=UTC)

    @pytest.mark.parametrize("interval", [60, 3600, 86400, 604800, 2592000])
    @pytest.mark.parametrize("elapsed_seconds", [1, 59, 3601, 86399, 10**7 + 7])
    def test_within_one_interval_of_now(self, interval, elapsed_seconds):
        now = ANCHOR + timedelta(seconds=elapsed_seconds)
        result = next_trigger(ANCHOR, interval, now)
        assert now <= result < now + timedelta(seconds=interval)
        assert (result - ANCHOR) % timedelta(seconds=interval) == timedelta(0)

    def test_steps_in_absolute_time_across_dst_fall_back(self):
        new_york = tz.gettz("America/New_York")
        scheduled = datetime(2026, 11, 1, 1, 0, tzinfo=new_york)  # EDT, 05:00 UTC
        now = datetime(2026, 11, 1, 1, 30, fold=1, tzinfo=new_york)  # EST, 06:30 UTC

        result = next_trigger(scheduled, 900, now)

        assert result.timestamp() == now.timestamp()
        assert result.utcoffset() == timedelta(hours=-5)

    def test_result_keeps_schedule_timezone(self):
        plus2 = timezone(timedelta(hours=2))
        scheduled = datetime(2026, 3, 8, 7, 0, tzinfo=plus2)
        result = next_trigger(scheduled, 86400, datetime(2026, 3, 11, 9, 0, tzinfo=UTC))
        assert result == datetime(2026, 3, 12, 7, 0, tzinfo=plus2)
        assert result.tzinfo is plus2

    @pytest.mark.parametrize("interval", [0, -5, -0.5])
    def test_non_positive_interval_is_rejected(self, interval):
        with pytest.raises(InvalidRuleError) as exc:
            next_trigger(ANCHOR, interval, ANCHOR + timedelta(days=1))
        assert exc.value.field == "repeat_interval"

    def test_non_numeric_interval_is_rejected(self):
        with pytest.raises(InvalidRuleError):
            repeat_interval_delta("3600")
