import pytest
from celery.signals import beat_init
from django.utils import timezone
from django_celery_beat.models import IntervalSchedule, PeriodicTask

from simulator.backends import BeatScheduler, InvalidScheduleError, OptionStore, build_schedule_synchronizer
from simulator.models import Option
from simulator.schedule import DAY_IN_SECONDS, ENABLE_CRON_OPTION, MONTHLY, SIMULATE_EVENT
from simulator.signals import sync_schedule_after_migrate


@pytest.mark.django_db
class TestBeatScheduler:
    def test_schedules_include_configured_and_monthly(self, settings):
        settings.SIMULATOR_CRON_SCHEDULES = {"daily": {"interval": DAY_IN_SECONDS, "display": "Once Daily"}}

        schedules = BeatScheduler().schedules()

        assert set(schedules) == {"daily", MONTHLY}

    def test_base_monthly_entry_is_not_overridden(self):
        scheduler = BeatScheduler(base_schedules={MONTHLY: {"interval": 3600, "display": "Hourly month"}})

        assert scheduler.schedules()[MONTHLY]["interval"] == 3600

    def test_schedule_creates_enabled_periodic_task(self):
        start = timezone.now()

        task = BeatScheduler().schedule(SIMULATE_EVENT, start, MONTHLY)

        task.refresh_from_db()
        assert task.name == SIMULATE_EVENT
        assert task.task == SIMULATE_EVENT
        assert task.enabled is True
        assert task.start_time == start
        assert task.interval.every == 30 * DAY_IN_SECONDS
        assert task.interval.period == IntervalSchedule.SECONDS
        assert task.description == "Once a Month"

    def test_schedule_twice_keeps_one_task(self):
        scheduler = BeatScheduler()

        scheduler.schedule(SIMULATE_EVENT, timezone.now(), MONTHLY)
        scheduler.schedule(SIMULATE_EVENT, timezone.now(), MONTHLY)

        assert PeriodicTask.objects.filter(name=SIMULATE_EVENT).count() == 1
        assert IntervalSchedule.objects.filter(every=30 * DAY_IN_SECONDS).count() == 1

    def test_disabled_task_is_reenabled(self):
        scheduler = BeatScheduler()
        task = scheduler.schedule(SIMULATE_EVENT, timezone.now(), MONTHLY)
        PeriodicTask.objects.filter(pk=task.pk).update(enabled=False)
        assert scheduler.is_scheduled(SIMULATE_EVENT) is False

        scheduler.schedule(SIMULATE_EVENT, timezone.now(), MONTHLY)

        assert scheduler.is_scheduled(SIMULATE_EVENT) is True
        assert PeriodicTask.objects.filter(name=SIMULATE_EVENT).count() == 1

    def test_unknown_recurrence_is_rejected(self):
        with pytest.raises(InvalidScheduleError, match="fortnightly"):
            BeatScheduler().schedule(SIMULATE_EVENT, timezone.now(), "fortnightly")

        assert not PeriodicTask.objects.filter(name=SIMULATE_EVENT).exists()

    def test_unschedule_is_idempotent(self):
        scheduler = BeatScheduler()
        scheduler.schedule(SIMULATE_EVENT, timezone.now(), MONTHLY)

        assert scheduler.unschedule(SIMULATE_EVENT) == 1
        assert scheduler.unschedule(SIMULATE_EVENT) == 0
        assert scheduler.get(SIMULATE_EVENT) is None


@pytest.mark.django_db
class TestScheduleLifecycle:
    def test_saving_option_schedules_and_unschedules(self):
        options = OptionStore()

        options.set(ENABLE_CRON_OPTION, True)
        assert PeriodicTask.objects.filter(name=SIMULATE_EVENT, enabled=True).count() == 1

        options.set(ENABLE_CRON_OPTION, True)
        assert PeriodicTask.objects.filter(name=SIMULATE_EVENT).count() == 1

        options.set(ENABLE_CRON_OPTION, False)
        assert not PeriodicTask.objects.filter(name=SIMULATE_EVENT).exists()

    def test_unrelated_option_does_not_touch_schedule(self):
        BeatScheduler().schedule(SIMULATE_EVENT, timezone.now(), MONTHLY)

        OptionStore().set("some_other_option", "value")

        assert PeriodicTask.objects.filter(name=SIMULATE_EVENT).exists()

    def test_post_migrate_hook_removes_stale_job(self):
        BeatScheduler().schedule(SIMULATE_EVENT, timezone.now(), MONTHLY)

        sync_schedule_after_migrate(sender=None)

        assert not PeriodicTask.objects.filter(name=SIMULATE_EVENT).exists()

    def test_beat_start_restores_missing_job(self):
        Option.objects.update_or_create(name=ENABLE_CRON_OPTION, defaults={"value": True})
        PeriodicTask.objects.filter(name=SIMULATE_EVENT).delete()

        beat_init.send(sender=None)

        assert PeriodicTask.objects.filter(name=SIMULATE_EVENT, enabled=True).exists()

    def test_synchronizer_factory_uses_database(self):
        OptionStore().set(ENABLE_CRON_OPTION, True)
        PeriodicTask.objects.filter(name=SIMULATE_EVENT).delete()

        assert build_schedule_synchronizer().sync() is True
        assert PeriodicTask.objects.filter(name=SIMULATE_EVENT).count() == 1
