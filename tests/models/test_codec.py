"""Tests for petcare.models.codec."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from petcare.core.exceptions import InvalidRuleError, ValidationError
from petcare.models import Medication, Pet, RecurrenceRule, Reminder, Task, Vaccine
from petcare.models.codec import KINDS, decode_collection, from_record, kind_of, to_record

NOW = datetime(2026, 3, 11, 9, 0, tzinfo=UTC)
ISTANBUL = timezone(timedelta(hours=3))


def _entities():
    pet = Pet.create("Mia", "cat", birth_date=datetime(2020, 5, 1, tzinfo=ISTANBUL), now=NOW)
    return [
        pet,
        Pet.create("Bare", now=NOW),
        Task.create(
            "Litter",
            "cleaning",
            priority="high",
            pet_id=pet.id,
            due_date=NOW,
            recurrence=RecurrenceRule("weekly", 2),
            now=NOW,
        ).mark_completed(NOW),
        Task.create("Loose end", now=NOW),
        Reminder.create(
            "Drops", NOW, message="Left eye", pet_id=pet.id, is_repeating=True, repeat_type="daily", now=NOW
        ),
        Vaccine.create(pet.id, "FeLV", "feline_leukemia", NOW, next_due_date=NOW + timedelta(days=30), now=NOW),
        Medication.create(pet.id, "Drops", "1 drop", "twice_daily", NOW, end_date=NOW + timedelta(days=7), now=NOW),
    ]


class TestRoundTrip:
    @pytest.mark.parametrize("entity", _entities(), ids=lambda e: type(e).__name__)
    def test_field_for_field(self, entity):
        assert from_record(type(entity), to_record(entity)) == entity

    def test_absent_optionals_stay_absent(self):
        task = Task.create("Loose end", now=NOW)
        record = to_record(task)
        assert record["due_date"] is None
        assert record["pet_id"] is None
        decoded = from_record(Task, record)
        assert decoded.due_date is None
        assert decoded.recurrence is None

    def test_offset_is_preserved(self):
        pet = _entities()[0]
        record = to_record(pet)
        assert record["birth_date"] == "2020-05-01T00:00:00+03:00"
        assert from_record(Pet, record).birth_date.utcoffset() == timedelta(hours=3)


class TestEncoding:
    def test_enums_as_values(self):
        record = to_record(Task.create("Walk", "walking", priority="urgent", now=NOW))
        assert record["category"] == "walking"
        assert record["priority"] == "urgent"

    def test_recurrence_is_flattened(self):
        task = Task.create("Walk", recurrence=RecurrenceRule("monthly", 3), now=NOW)
        record = to_record(task)
        assert "recurrence" not in record
        assert record["is_recurring"] is True
        assert record["recurrence_type"] == "monthly"
        assert record["recurrence_interval"] == 3

    def test_naive_datetime_is_rejected(self):
        task = Task.create("Walk", due_date=NOW, now=NOW)
        task.due_date = datetime(2026, 3, 11, 9, 0)
        with pytest.raises(ValidationError) as exc:
            to_record(task)
        assert exc.value.field == "due_date"


class TestDecoding:
    def _record(self, **overrides):
        record = to_record(Task.create("Walk", due_date=NOW, now=NOW))
        record.update(overrides)
        return record

    def test_half_recurrence_is_rejected(self):
        with pytest.raises(ValidationError):
            from_record(Task, self._record(recurrence_type="daily"))

    def test_bad_interval_is_rejected(self):
        with pytest.raises(InvalidRuleError):
            from_record(Task, self._record(is_recurring=True, recurrence_type="daily", recurrence_interval=0))

    def test_not_recurring_flag_ignores_stale_fields(self):
        task = from_record(Task, self._record(is_recurring=False, recurrence_type="daily", recurrence_interval=1))
        assert task.recurrence is None

    def test_timestamp_without_offset(self):
        with pytest.raises(ValidationError):
            from_record(Task, self._record(due_date="2026-03-11T09:00:00"))

    def test_garbage_timestamp(self):
        with pytest.raises(ValidationError):
            from_record(Task, self._record(due_date="next tuesday"))

    def test_missing_required_field(self):
        record = self._record()
        del record["title"]
        with pytest.raises(ValidationError) as exc:
            from_record(Task, record)
        assert exc.value.field == "title"

    def test_missing_optional_field_uses_default(self):
        record = self._record()
        del record["priority"]
        assert from_record(Task, record).priority == "medium"

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            decode_collection("toys", [])

    def test_kinds(self):
        assert set(KINDS) == {"pets", "tasks", "reminders", "vaccines", "medications"}
        assert kind_of(Reminder) == "reminders"
