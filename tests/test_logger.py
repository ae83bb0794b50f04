"""Tests for the structlog setup."""

import logging
import unittest

import structlog

from partsdesk.utils.logger import configure_logging, get_logger


class TestLogging(unittest.TestCase):
    def setUp(self):
        self.root = logging.getLogger()
        self.saved_handlers = list(self.root.handlers)
        self.saved_level = self.root.level
        self.marker = logging.NullHandler()
        self.root.addHandler(self.marker)

    def tearDown(self):
        self.root.handlers[:] = self.saved_handlers
        self.root.setLevel(self.saved_level)
        structlog.reset_defaults()

    def test_get_logger_leaves_root_handlers_alone(self):
        import partsdesk.services.catalog  # noqa: F401  module-level logger

        handlers_before = list(self.root.handlers)
        get_logger("partsdesk.test", run="x")
        self.assertEqual(self.root.handlers, handlers_before)
        self.assertIn(self.marker, self.root.handlers)

    def test_configure_keeps_existing_handlers(self):
        configure_logging("debug")
        self.assertIn(self.marker, self.root.handlers)
        self.assertEqual(logging.getLogger("sqlalchemy").level, logging.WARNING)

    def test_events_reach_stdlib_logging(self):
        configure_logging("INFO")
        with self.assertLogs("partsdesk.test", level="INFO") as captured:
            get_logger("partsdesk.test").info("desk_event", parts=3)
        self.assertIn("desk_event", captured.output[0])
        self.assertIn("parts=3", captured.output[0])

    def test_filtered_below_level(self):
        configure_logging("WARNING")
        with self.assertLogs("partsdesk.test", level="DEBUG") as captured:
            log = get_logger("partsdesk.test")
            log.info("hidden")
            log.warning("shown")
        self.assertEqual(len(captured.output), 1)
        self.assertIn("shown", captured.output[0])


if __name__ == "__main__":
    unittest.main()
