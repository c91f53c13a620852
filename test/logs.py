"""
Logging tests (event rendering, library events, host configuration).
"""

import logging
import unittest
from unittest import TestCase

from rich.logging import RichHandler

from reins import Registry
from reins.logging import configure_logging, format_context, get_logger, render_event


class TestRendering(TestCase):

    def testEventWithContext(self):
        event = {"event": "segment_parsed", "action": "copy", "arguments": 2, "level": "debug"}
        self.assertEqual(render_event(None, "debug", event), "segment_parsed action='copy' arguments=2")

    def testEventWithoutContext(self):
        self.assertEqual(render_event(None, "info", {"event": "registry_reset"}), "registry_reset")
        self.assertEqual(format_context({}), "")


class TestLibraryEvents(TestCase):

    def testParseEvents(self):
        registry = Registry()
        registry.define_action("copy", 2)
        with self.assertLogs("reins.parser", level="DEBUG") as logs:
            registry.parse(["app", "copy", "a", "b"])
        self.assertEqual(logs.output, [
            "DEBUG:reins.parser:parse_started tokens=3",
            "DEBUG:reins.parser:segment_parsed action='copy' arguments=2 flags=[]",
            "DEBUG:reins.parser:parse_finished actions=['copy'] result='OK'",
        ])

    def testParseFailureEvent(self):
        registry = Registry()
        with self.assertLogs("reins.parser", level="DEBUG") as logs:
            registry.parse(["app", "nope"])
        self.assertIn("DEBUG:reins.parser:parse_failed index=1 result='ERROR' token='nope'", logs.output)

    def testDispatchEvents(self):
        registry = Registry()
        registry.define_action("fail", 0, callback=lambda arguments: 4)
        registry.parse(["app", "fail"])
        with self.assertLogs("reins.dispatcher", level="DEBUG") as logs:
            registry.start()
        self.assertIn("DEBUG:reins.dispatcher:segment_finished action='fail' position=1 status=4", logs.output)

    def testSilentAboveDebug(self):
        logger = get_logger("reins.quiet")
        with self.assertLogs("reins.quiet", level="INFO") as logs:
            logger.debug("hidden")
            logger.info("shown", key="value")
        self.assertEqual(logs.output, ["INFO:reins.quiet:shown key='value'"])


class TestConfiguration(TestCase):

    def setUp(self):
        root = logging.getLogger()
        self.saved = root.level, root.handlers[:]

    def tearDown(self):
        root = logging.getLogger()
        level, handlers = self.saved
        root.handlers[:] = handlers
        root.setLevel(level)

    def testDefaultLevel(self):
        configure_logging()
        root = logging.getLogger()
        self.assertEqual(root.level, logging.INFO)
        self.assertTrue(any(isinstance(handler, RichHandler) for handler in root.handlers))

    def testVerboseFlags(self):
        configure_logging(verbose=True)
        self.assertEqual(logging.getLogger().level, logging.DEBUG)
        configure_logging(vlevel=2)
        self.assertEqual(logging.getLogger().level, logging.DEBUG)
        configure_logging(vlevel=0)
        self.assertEqual(logging.getLogger().level, logging.INFO)


if __name__ == "__main__":
    unittest.main()
