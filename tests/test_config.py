import os
import unittest
from unittest import mock

from mediatracker.config import DEFAULT_QUERIES, TrackerConfig


class TestTrackerConfig(unittest.TestCase):
    @mock.patch.dict(os.environ, {}, clear=True)
    def test_defaults_have_no_optional_features(self):
        config = TrackerConfig.from_env()
        self.assertEqual(config.subject_surname, "Bachmeier")
        self.assertEqual(config.search_queries, DEFAULT_QUERIES)
        self.assertFalse(config.search_enabled)
        self.assertFalse(config.email_enabled)
        self.assertFalse(config.mailing_list_configured)
        self.assertTrue(config.mailing_list_enabled)

    @mock.patch.dict(
        os.environ,
        {
            "SUBJECT_NAME": "Kirsten Baesler",
            "SEARCH_QUERIES": "Kirsten Baesler | Baesler interview ||",
            "SERPER_API_KEY": " serper ",
            "RESEND_API_KEY": "re_key",
            "NOTIFY_EMAIL": "me@example.com",
            "VERBOSE_SUMMARY": "yes",
            "MAILING_LIST_ENABLED": "false",
            "UPDATE_DAY": "Friday",
        },
        clear=True,
    )
    def test_reads_environment(self):
        config = TrackerConfig.from_env()
        self.assertEqual(config.subject_surname, "Baesler")
        self.assertEqual(config.search_queries, ["Kirsten Baesler", "Baesler interview"])
        self.assertEqual(config.serper_api_key, "serper")
        self.assertTrue(config.email_enabled)
        self.assertTrue(config.verbose_summary)
        self.assertFalse(config.mailing_list_enabled)
        self.assertEqual(config.update_day, "friday")

    @mock.patch.dict(os.environ, {"SEARCH_RESULTS_PER_QUERY": "0", "UPDATE_DAY": "someday"}, clear=True)
    def test_invalid_values_raise(self):
        with self.assertRaises(ValueError) as ctx:
            TrackerConfig.from_env()
        self.assertIn("SEARCH_RESULTS_PER_QUERY", str(ctx.exception))
        self.assertIn("UPDATE_DAY", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
