import unittest
from unittest import mock

import requests

from mediatracker.config import TrackerConfig
from mediatracker.notify.emailer import (
    ResendEmailClient,
    build_recipients,
    render_summary_html,
    send_notification,
)
from mediatracker.notify.mailing_list import NotionMailingList, mailing_list_from_config
from mediatracker.records.appearance_types import AppearanceCandidate


CANDIDATES = [
    AppearanceCandidate(
        title="Bachmeier <talks> reading",
        url="https://example.com/a?x=1&y=2",
        date="2025-01-08",
        source="KX News",
        snippet="Superintendent Bachmeier said...",
    ),
    AppearanceCandidate(title="Bachmeier in Minot", url="https://example.com/b", date="2025-01-09", source="Minot Daily"),
]


class FakeClient:
    def __init__(self, ok=True, exc=None):
        self.ok = ok
        self.exc = exc
        self.sent = []

    def send(self, sender, recipients, subject, html_body):
        if self.exc is not None:
            raise self.exc
        self.sent.append((sender, list(recipients), subject, html_body))
        return self.ok


class FakeMailingList:
    def __init__(self, emails):
        self.emails = emails

    def fetch_emails(self):
        return list(self.emails)


def email_config(**kw):
    return TrackerConfig(resend_api_key="re_key", notify_email="me@example.com", **kw)


class TestRecipientsAndRendering(unittest.TestCase):
    def test_build_recipients_primary_first_without_duplicates(self):
        self.assertEqual(
            build_recipients("me@example.com", ["a@example.com", "", "me@example.com", "a@example.com"]),
            ["me@example.com", "a@example.com"],
        )
        self.assertEqual(build_recipients(None, ["a@example.com"]), ["a@example.com"])

    def test_render_lists_every_candidate_escaped(self):
        body = render_summary_html(CANDIDATES, subject_name="Levi Bachmeier", tracker_url="https://libby-tracker.netlify.app")
        self.assertIn("Found 2 new media appearance(s)", body)
        self.assertIn("Bachmeier &lt;talks&gt; reading", body)
        self.assertIn("href=\"https://example.com/a?x=1&amp;y=2\"", body)
        self.assertIn("KX News - 2025-01-08", body)
        self.assertIn(">libby-tracker.netlify.app</a>", body)
        self.assertNotIn("Superintendent Bachmeier said", body)

    def test_verbose_render_includes_snippets(self):
        body = render_summary_html(CANDIDATES, subject_name="Levi Bachmeier", verbose=True)
        self.assertIn("Superintendent Bachmeier said", body)
        self.assertNotIn("View the full tracker", body)


class TestSendNotification(unittest.TestCase):
    def test_skipped_without_credentials(self):
        client = FakeClient()
        self.assertFalse(send_notification(CANDIDATES, TrackerConfig(), client=client))
        self.assertFalse(send_notification(CANDIDATES, TrackerConfig(resend_api_key="re_key"), client=client))
        self.assertEqual(client.sent, [])

    def test_sends_one_message_to_all_recipients(self):
        client = FakeClient()
        ok = send_notification(
            CANDIDATES,
            email_config(),
            mailing_list=FakeMailingList(["pl1@example.com", "pl2@example.com"]),
            client=client,
        )
        self.assertTrue(ok)
        self.assertEqual(len(client.sent), 1)
        sender, recipients, subject, _ = client.sent[0]
        self.assertEqual(sender, "Libby Tracker <onboarding@resend.dev>")
        self.assertEqual(recipients, ["me@example.com", "pl1@example.com", "pl2@example.com"])
        self.assertEqual(subject, "[Libby Tracker] 2 new appearance(s) found")

    def test_delivery_failure_is_reported_not_raised(self):
        self.assertFalse(send_notification(CANDIDATES, email_config(), client=FakeClient(ok=False)))
        self.assertFalse(send_notification(CANDIDATES, email_config(), client=FakeClient(exc=RuntimeError("down"))))

    @mock.patch("mediatracker.notify.emailer.requests.post")
    def test_resend_client_posts_payload(self, post):
        client = ResendEmailClient(api_key="re_key")
        self.assertTrue(client.send("from@example.com", ["to@example.com"], "subj", "<p>hi</p>"))
        _, kwargs = post.call_args
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer re_key")
        self.assertEqual(kwargs["json"]["to"], ["to@example.com"])

        post.side_effect = requests.ConnectionError("no route")
        self.assertFalse(client.send("from@example.com", ["to@example.com"], "subj", "<p>hi</p>"))


def _notion_response(payload):
    resp = mock.Mock()
    resp.json.return_value = payload
    resp.raise_for_status.return_value = None
    return resp


class TestNotionMailingList(unittest.TestCase):
    @mock.patch("mediatracker.notify.mailing_list.requests.post")
    def test_follows_pagination_and_skips_missing_emails(self, post):
        post.side_effect = [
            _notion_response({
                "results": [
                    {"properties": {"Email": {"email": "a@example.com"}}},
                    {"properties": {"Email": {"email": None}}},
                ],
                "has_more": True,
                "next_cursor": "cur-2",
            }),
            _notion_response({
                "results": [{"properties": {"Email": {"email": "b@example.com"}}}, {"properties": {}}],
                "has_more": False,
                "next_cursor": None,
            }),
        ]
        ml = NotionMailingList(api_key="secret", database_id="db1")
        self.assertEqual(ml.fetch_emails(), ["a@example.com", "b@example.com"])

        first_body = post.call_args_list[0][1]["json"]
        second_body = post.call_args_list[1][1]["json"]
        self.assertEqual(first_body["filter"], {"property": "Tags", "multi_select": {"contains": "PL members"}})
        self.assertNotIn("start_cursor", first_body)
        self.assertEqual(second_body["start_cursor"], "cur-2")
        self.assertIn("/databases/db1/query", post.call_args_list[0][0][0])

    @mock.patch("mediatracker.notify.mailing_list.requests.post")
    def test_errors_yield_empty_list(self, post):
        post.side_effect = requests.HTTPError("401")
        self.assertEqual(NotionMailingList(api_key="secret", database_id="db1").fetch_emails(), [])

    def test_from_config_gates(self):
        self.assertIsNone(mailing_list_from_config(TrackerConfig()))
        self.assertIsNone(
            mailing_list_from_config(TrackerConfig(notion_api_key="k", notion_database_id="d", mailing_list_enabled=False))
        )
        ml = mailing_list_from_config(TrackerConfig(notion_api_key="k", notion_database_id="d", mailing_list_tag="Board"))
        self.assertEqual(ml.tag, "Board")


if __name__ == "__main__":
    unittest.main()
