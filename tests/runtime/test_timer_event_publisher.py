import unittest

from pomodoro import ManualScheduler, Phase, PhaseSequencer, PhaseSettings
from runtime import TimerEventPublisher


class _FakeServer:
    def __init__(self):
        self.events: list[tuple[str, dict]] = []

    def publish(self, event_type: str, **payload) -> None:
        self.events.append((event_type, payload))


class TimerEventPublisherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.scheduler = ManualScheduler()
        self.sequencer = PhaseSequencer(
            PhaseSettings(1, 0.5, 2, 2),
            scheduler=self.scheduler,
            tick_seconds=20,
        )
        self.server = _FakeServer()
        self.sequencer.observe(TimerEventPublisher(self.server))

    def test_start_tick_and_expire_publish_timer_events(self) -> None:
        self.sequencer.start()
        self.scheduler.advance(60)

        actions = [payload["action"] for _, payload in self.server.events]
        self.assertEqual(["start", "tick", "tick", "expire"], actions)
        self.assertEqual({"timer"}, {event_type for event_type, _ in self.server.events})

        start = self.server.events[0][1]
        self.assertEqual(
            {
                "action": "start",
                "phase": "focus",
                "next_phase": "short_break",
                "elapsed_seconds": 0,
                "remaining_seconds": 60,
                "message": "Focus started (01:00)",
            },
            start,
        )
        self.assertEqual(40, self.server.events[1][1]["remaining_seconds"])
        self.assertEqual(
            "Focus complete, short break is next",
            self.server.events[-1][1]["message"],
        )

    def test_pause_resume_and_stop(self) -> None:
        self.sequencer.start()
        self.scheduler.advance(15)
        self.sequencer.pause()
        self.sequencer.resume()
        self.sequencer.stop()

        pause, resume, stop = (payload for _, payload in self.server.events[1:])
        self.assertEqual("pause", pause["action"])
        self.assertEqual(15, pause["elapsed_seconds"])
        self.assertEqual(45, pause["remaining_seconds"])
        self.assertEqual("Focus paused (00:45 remaining)", pause["message"])
        self.assertEqual("resume", resume["action"])
        self.assertEqual(
            {
                "action": "stop",
                "phase": "focus",
                "next_phase": "short_break",
                "message": "Focus stopped",
            },
            stop,
        )

    def test_cycle_reset_publishes_cycle_event(self) -> None:
        self.sequencer.set_phase(Phase.LONG_BREAK)

        self.assertEqual(
            [("cycle", {"action": "reset", "phase": "long_break"})],
            self.server.events,
        )

    def test_publish_settings(self) -> None:
        publisher = TimerEventPublisher(self.server)

        publisher.publish_settings(PhaseSettings(25, 5, 15, 4))

        event_type, payload = self.server.events[-1]
        self.assertEqual("settings", event_type)
        self.assertEqual({"duration": 15, "interval": 4}, payload["long_break"])

    def test_without_server_is_silent(self) -> None:
        sequencer = PhaseSequencer(PhaseSettings(), scheduler=self.scheduler)
        sequencer.observe(TimerEventPublisher(None))

        sequencer.start()
        sequencer.stop()


if __name__ == "__main__":
    unittest.main()
