import unittest
from unittest.mock import patch

from pomodoro import (
    IntervalTimer,
    InvalidConfigurationError,
    ManualScheduler,
    Phase,
    PhaseSequencer,
    PhaseSettings,
    TimerState,
)

F = Phase.FOCUS
SB = Phase.SHORT_BREAK
LB = Phase.LONG_BREAK

# focus 60s, short break 30s, long break 120s, long break after 2 focus blocks
SETTINGS = PhaseSettings(1, 0.5, 2, 2)


class _Recorder:
    def __init__(self):
        self.calls: list[tuple[str, tuple]] = []

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def of(self, name: str) -> list[tuple]:
        return [args for event, args in self.calls if event == name]

    def on_timer_start(self, *args):
        self.calls.append(("timer:start", args))

    def on_timer_stop(self, *args):
        self.calls.append(("timer:stop", args))

    def on_timer_pause(self, *args):
        self.calls.append(("timer:pause", args))

    def on_timer_resume(self, *args):
        self.calls.append(("timer:resume", args))

    def on_timer_tick(self, *args):
        self.calls.append(("timer:tick", args))

    def on_timer_expire(self, *args):
        self.calls.append(("timer:expire", args))

    def on_timer_change(self, *args):
        self.calls.append(("timer:change", args))

    def on_cycle_reset(self, *args):
        self.calls.append(("cycle:reset", args))


def _sequencer(settings: PhaseSettings = SETTINGS, initial: Phase = F):
    scheduler = ManualScheduler()
    sequencer = PhaseSequencer(settings, initial, scheduler=scheduler, tick_seconds=10)
    recorder = _Recorder()
    sequencer.observe(recorder)
    return sequencer, scheduler, recorder


def _run_phase(sequencer: PhaseSequencer, scheduler: ManualScheduler) -> Phase:
    sequencer.start()
    phase = sequencer.phase
    scheduler.advance(sequencer.timer.duration)
    return phase


class PhaseSequencerTests(unittest.TestCase):
    def test_new_sequencer_is_at_focus_and_stopped(self) -> None:
        sequencer, scheduler, recorder = _sequencer()

        self.assertEqual(F, sequencer.phase)
        self.assertEqual(SB, sequencer.next_phase)
        self.assertEqual(TimerState.STOPPED, sequencer.state)
        self.assertEqual(60, sequencer.timer.duration)
        self.assertEqual(0, scheduler.pending)
        self.assertEqual([], recorder.calls)

    def test_start_runs_prepared_phase_with_rebroadcast(self) -> None:
        sequencer, _, recorder = _sequencer()

        sequencer.start()

        self.assertTrue(sequencer.is_running)
        self.assertEqual(
            [
                ("timer:start", (F, SB, 0, 60)),
                ("timer:change", (F, SB)),
            ],
            recorder.calls,
        )

    def test_tick_and_expire_carry_phase(self) -> None:
        sequencer, scheduler, recorder = _sequencer()
        sequencer.start()

        scheduler.advance(60)

        self.assertEqual((F, SB, 10.0, 50.0), recorder.of("timer:tick")[0])
        self.assertEqual(5, len(recorder.of("timer:tick")))
        self.assertEqual([(F, SB, 60, 0)], recorder.of("timer:expire"))
        self.assertTrue(sequencer.is_stopped)

    def test_expiry_does_not_advance_until_start(self) -> None:
        sequencer, scheduler, _ = _sequencer()
        sequencer.start()
        scheduler.advance(60)

        self.assertEqual(F, sequencer.phase)
        self.assertEqual(0, scheduler.pending)

        sequencer.start()

        self.assertEqual(SB, sequencer.phase)
        self.assertEqual(F, sequencer.next_phase)
        self.assertEqual(30, sequencer.timer.duration)

    def test_full_cycle_order(self) -> None:
        sequencer, scheduler, _ = _sequencer()

        phases = [_run_phase(sequencer, scheduler) for _ in range(6)]

        self.assertEqual([F, SB, F, SB, LB, F], phases)

    def test_start_skips_unfinished_phase(self) -> None:
        sequencer, scheduler, recorder = _sequencer()
        sequencer.start()
        scheduler.advance(20)
        recorder.calls.clear()

        sequencer.start()

        self.assertEqual(SB, sequencer.phase)
        self.assertEqual(
            [
                ("timer:stop", (F, SB)),
                ("timer:change", (F, SB)),
                ("timer:start", (SB, F, 0, 30)),
                ("timer:change", (SB, F)),
            ],
            recorder.calls,
        )

    def test_replaced_timer_stops_emitting(self) -> None:
        sequencer, scheduler, recorder = _sequencer()
        sequencer.start()
        old_timer = sequencer.timer
        sequencer.start()
        recorder.calls.clear()

        old_timer.start()
        scheduler.advance(5)

        self.assertEqual([], recorder.calls)
        self.assertEqual(0, old_timer.listener_count("start"))

    def test_pause_resume_stop_reset_delegate(self) -> None:
        sequencer, scheduler, recorder = _sequencer()
        sequencer.start()
        scheduler.advance(15)

        sequencer.pause()
        self.assertTrue(sequencer.is_paused)
        self.assertEqual((F, SB, 15.0, 45.0), recorder.of("timer:pause")[0])

        sequencer.resume()
        self.assertTrue(sequencer.is_running)
        self.assertEqual((F, SB, 15.0, 45.0), recorder.of("timer:resume")[0])

        sequencer.reset()
        self.assertEqual((F, SB, 0, 60), recorder.of("timer:start")[-1])
        self.assertEqual(F, sequencer.phase)

        sequencer.stop()
        self.assertTrue(sequencer.is_stopped)
        self.assertEqual(F, sequencer.phase)

    def test_set_phase_emits_cycle_reset_and_prepares_target(self) -> None:
        sequencer, scheduler, recorder = _sequencer()

        sequencer.set_phase(LB)

        self.assertEqual([("cycle:reset", (LB,))], recorder.calls)
        self.assertEqual(LB, sequencer.phase)
        self.assertEqual(F, sequencer.next_phase)
        self.assertEqual(120, sequencer.timer.duration)
        self.assertTrue(sequencer.is_stopped)
        self.assertEqual(0, scheduler.pending)

    def test_set_phase_accepts_phase_value(self) -> None:
        sequencer, _, _ = _sequencer()

        sequencer.set_phase("short_break")

        self.assertEqual(SB, sequencer.phase)

    def test_set_phase_rejects_unknown_phase(self) -> None:
        sequencer, _, _ = _sequencer()

        with self.assertRaises(ValueError):
            sequencer.set_phase("lunch")

    def test_set_phase_creates_only_target_timer(self) -> None:
        sequencer, _, _ = _sequencer()

        with patch("pomodoro.sequencer.IntervalTimer", wraps=IntervalTimer) as timer_cls:
            sequencer.set_phase(LB)

        self.assertEqual(1, timer_cls.call_count)
        self.assertEqual(120, timer_cls.call_args.args[0])

    def test_set_phase_stops_running_timer_with_old_phase(self) -> None:
        sequencer, scheduler, recorder = _sequencer()
        sequencer.start()
        recorder.calls.clear()

        sequencer.set_phase(SB)

        self.assertEqual(
            [
                ("timer:stop", (F, SB)),
                ("timer:change", (F, SB)),
                ("cycle:reset", (SB,)),
            ],
            recorder.calls,
        )
        self.assertEqual(0, scheduler.pending)

    def test_start_after_set_phase_uses_prepared_timer(self) -> None:
        sequencer, _, _ = _sequencer()
        sequencer.set_phase(LB)
        prepared = sequencer.timer

        sequencer.start()

        self.assertIs(prepared, sequencer.timer)
        self.assertEqual(LB, sequencer.phase)
        self.assertTrue(sequencer.is_running)

    def test_cycle_continues_after_long_break(self) -> None:
        sequencer, scheduler, _ = _sequencer()
        sequencer.set_phase(LB)

        phases = [_run_phase(sequencer, scheduler) for _ in range(4)]

        self.assertEqual([LB, F, SB, F], phases)

    def test_start_long_break_without_interval_fails(self) -> None:
        sequencer, scheduler, recorder = _sequencer(PhaseSettings(1, 0.5, 2, 0))
        sequencer.start()
        recorder.calls.clear()

        with self.assertRaisesRegex(InvalidConfigurationError, "No long break interval defined"):
            sequencer.start_long_break()

        self.assertEqual(F, sequencer.phase)
        self.assertTrue(sequencer.is_running)
        self.assertEqual([], recorder.calls)

    def test_initial_long_break_without_interval_fails(self) -> None:
        with self.assertRaises(InvalidConfigurationError):
            PhaseSequencer(PhaseSettings(1, 0.5, 2, 0), LB, scheduler=ManualScheduler())

    def test_start_helpers_begin_requested_phase(self) -> None:
        sequencer, _, recorder = _sequencer()

        sequencer.start_short_break()
        self.assertEqual(SB, sequencer.phase)
        self.assertTrue(sequencer.is_running)

        sequencer.start_long_break()
        self.assertEqual(LB, sequencer.phase)
        self.assertTrue(sequencer.is_running)

        sequencer.start_focus()
        self.assertEqual(F, sequencer.phase)
        self.assertTrue(sequencer.is_running)

        sequencer.start_cycle()
        self.assertEqual(F, sequencer.phase)
        self.assertEqual([(SB,), (LB,), (F,), (F,)], recorder.of("cycle:reset"))

    def test_snapshot_reports_phase_and_progress(self) -> None:
        sequencer, scheduler, _ = _sequencer()
        sequencer.start()
        scheduler.advance(25)

        snapshot = sequencer.snapshot()

        self.assertEqual(F, snapshot.phase)
        self.assertEqual(SB, snapshot.next_phase)
        self.assertTrue(snapshot.has_long_break)
        self.assertEqual(TimerState.RUNNING, snapshot.state)
        self.assertAlmostEqual(35, snapshot.timer.remaining_seconds)

    def test_dispose_stops_current_timer(self) -> None:
        sequencer, scheduler, recorder = _sequencer()
        sequencer.start()

        sequencer.dispose()

        self.assertEqual(("timer:stop", (F, SB)), recorder.calls[-2])
        self.assertEqual(0, scheduler.pending)


if __name__ == "__main__":
    unittest.main()
