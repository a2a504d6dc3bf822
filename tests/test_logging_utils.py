import unittest

from logging_utils import get_log_level, log_event, set_log_level
from vector_math import Point2


class TestLoggingUtils(unittest.TestCase):
    def tearDown(self):
        set_log_level("INFO")

    def test_log_event_appends_fields_and_tag(self):
        with self.assertLogs("bezierrope", level="INFO") as captured:
            log_event("INFO", "FrameLoop", "Started", interval_ms="16.7", ticks=3)

        record = captured.records[0]
        self.assertEqual(record.getMessage(), "Started | interval_ms=16.7 ticks=3")
        self.assertEqual(record.tag, "FrameLoop")
        self.assertEqual(record.levelname, "INFO")

    def test_fields_are_formatted_compactly(self):
        with self.assertLogs("bezierrope", level="INFO") as captured:
            log_event("INFO", "Headless", "Done", p1=Point2(1.0, 2.5), dt=1 / 60,
                      size=(800, 600), source="udp")

        self.assertEqual(captured.records[0].getMessage(),
                         "Done | p1=(1.000, 2.500) dt=0.017 size=(800, 600) source=udp")

    def test_warn_alias_and_unknown_level(self):
        with self.assertLogs("bezierrope", level="INFO") as captured:
            log_event("WARN", "Sensor", "Slow")
            log_event("nonsense", "Sensor", "Fallback")

        self.assertEqual(captured.records[0].levelname, "WARNING")
        self.assertEqual(captured.records[1].levelname, "INFO")

    def test_set_and_get_level(self):
        set_log_level("debug")
        self.assertEqual(get_log_level(), "DEBUG")
        set_log_level("")
        self.assertEqual(get_log_level(), "INFO")


if __name__ == "__main__":
    unittest.main()
