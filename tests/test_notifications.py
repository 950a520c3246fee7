"""Tests for notification payloads and the in-memory notifier."""

from datetime import timedelta

from petcare.models import Pet, Reminder
from petcare.notifications import InMemoryNotifier, build_payload
from petcare.ports import NotificationPort


class TestBuildPayload:
    def test_message_and_pet(self, now):
        pet = Pet.create("Mia", "cat", now=now)
        reminder = Reminder.create("Drops", now, message="Left eye", pet_id=pet.id, task_id="t1", now=now)
        payload = build_payload(reminder, {pet.id: pet})
        assert payload.body == "Left eye"
        assert payload.subtitle == "Mia"
        assert payload.user_info == {"reminder_id": reminder.id, "pet_id": pet.id, "task_id": "t1"}
        assert payload.repeat_interval is None

    def test_default_body(self, now):
        reminder = Reminder.create("Drops", now, now=now)
        assert build_payload(reminder).body == "PetCare reminder"
        assert build_payload(reminder, default_body="Time!").body == "Time!"

    def test_repeating(self, now):
        reminder = Reminder.create("Walk", now, is_repeating=True, repeat_type="hourly", now=now)
        assert build_payload(reminder).repeat_interval == 3600


class TestInMemoryNotifier:
    async def test_schedule_cancel(self, now):
        notifier = InMemoryNotifier()
        payload = build_payload(Reminder.create("Drops", now, now=now))
        await notifier.schedule("n1", payload, now + timedelta(hours=1), False)
        await notifier.schedule("n2", payload, now + timedelta(hours=2), True)
        assert await notifier.pending_count() == 2

        await notifier.cancel("n1")
        assert list(notifier.pending) == ["n2"]

        await notifier.cancel_all()
        assert await notifier.pending_count() == 0
        assert notifier.cancelled == ["n1", "n2"]

    def test_satisfies_port(self):
        assert isinstance(InMemoryNotifier(), NotificationPort)
