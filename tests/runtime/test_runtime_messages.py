import unittest

from pomodoro import ManualScheduler, Phase, PhaseSequencer, PhaseSettings
from runtime.messages import format_duration, phase_label, status_message, timer_event_message


class RuntimeMessagesTests(unittest.TestCase):
    def test_format_duration_rounds_partial_seconds_up(self) -> None:
        self.assertEqual("25:00", format_duration(1500))
        self.assertEqual("00:01", format_duration(0.2))
        self.assertEqual("01:30", format_duration(89.5))
        self.assertEqual("00:00", format_duration(-3))

    def test_phase_label_accepts_enum_and_value(self) -> None:
        self.assertEqual("Short break", phase_label(Phase.SHORT_BREAK))
        self.assertEqual("Long break", phase_label("long_break"))

    def test_status_message_per_state(self) -> None:
        scheduler = ManualScheduler()
        sequencer = PhaseSequencer(PhaseSettings(25, 5, 15, 4), scheduler=scheduler)

        self.assertEqual("Focus ready (25:00)", status_message(sequencer.snapshot()))

        sequencer.start()
        scheduler.advance(61)
        self.assertEqual("Focus running (23:59 remaining)", status_message(sequencer.snapshot()))

        sequencer.pause()
        self.assertEqual("Focus paused (23:59 remaining)", status_message(sequencer.snapshot()))

    def test_timer_event_messages(self) -> None:
        self.assertEqual(
            "Short break: 02:00 remaining",
            timer_event_message("tick", Phase.SHORT_BREAK, Phase.FOCUS, 120),
        )
        self.assertEqual(
            "Short break complete, long break is next",
            timer_event_message("expire", Phase.SHORT_BREAK, Phase.LONG_BREAK),
        )
        self.assertEqual(
            "Long break resumed (10:00 remaining)",
            timer_event_message("resume", Phase.LONG_BREAK, Phase.FOCUS, 600),
        )


if __name__ == "__main__":
    unittest.main()
