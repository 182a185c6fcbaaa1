"""Weekly summary email via the Resend API.

Delivery is best effort: failures are logged and reported as False, and the
records already written to the data file stay written.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

import requests

from mediatracker.config import TrackerConfig
from mediatracker.notify.mailing_list import NotionMailingList
from mediatracker.records.appearance_types import AppearanceCandidate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResendEmailClient:
    api_key: str
    endpoint: str = "https://api.resend.com/emails"
    timeout: int = 30

    def send(self, sender: str, recipients: Sequence[str], subject: str, html_body: str) -> bool:
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        body = {"from": sender, "to": list(recipients), "subject": subject, "html": html_body}
        try:
            resp = requests.post(self.endpoint, json=body, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to send email: {e}")
            return False
        return True


def build_recipients(primary: Optional[str], extra: Iterable[str] = ()) -> List[str]:
    out: List[str] = []
    for addr in [primary, *extra]:
        addr = (addr or "").strip()
        if addr and addr not in out:
            out.append(addr)
    return out


def render_summary_html(
    candidates: Sequence[AppearanceCandidate],
    *,
    subject_name: str,
    tracker_url: str = "",
    verbose: bool = False,
) -> str:
    lines = []
    for c in candidates:
        line = (
            f"&bull; <a href=\"{html.escape(c.url, quote=True)}\">{html.escape(c.title)}</a><br>"
            f"  <small>{html.escape(c.source)} - {html.escape(c.date)}</small>"
        )
        if verbose and c.snippet:
            line += f"<br>  <small style=\"color: #666;\">{html.escape(c.snippet)}</small>"
        lines.append(line)

    parts = [
        f"<h2>{html.escape(subject_name)} Media Tracker Update</h2>",
        f"<p>Found {len(candidates)} new media appearance(s) this week:</p>",
        f"<div style=\"margin: 30px 0;\">{'<br><br>'.join(lines)}</div>",
        "<p style=\"color: #666; font-size: 12px;\">These need to be reviewed and added to the tracker with quotes.</p>",
    ]
    if tracker_url:
        url = html.escape(tracker_url, quote=True)
        label = html.escape(tracker_url.split("://", 1)[-1].rstrip("/"))
        parts.append("<hr style=\"margin: 30px 0; border: none; border-top: 1px solid #ddd;\">")
        parts.append(
            f"<p style=\"font-size: 12px; color: #999;\">View the full tracker: <a href=\"{url}\">{label}</a></p>"
        )
    return "\n".join(parts)


def send_notification(
    candidates: Sequence[AppearanceCandidate],
    config: TrackerConfig,
    *,
    mailing_list: Optional[NotionMailingList] = None,
    client: Optional[ResendEmailClient] = None,
) -> bool:
    """Email the summary of `candidates`; returns True when delivered."""
    if not config.email_enabled:
        logger.info("Email not configured. Skipping notification.")
        return False
    if not candidates:
        return False

    members = mailing_list.fetch_emails() if mailing_list is not None else []
    recipients = build_recipients(config.notify_email, members)

    client = client or ResendEmailClient(api_key=config.resend_api_key, timeout=config.request_timeout)
    subject = f"{config.email_subject_prefix} {len(candidates)} new appearance(s) found".strip()
    body = render_summary_html(
        candidates,
        subject_name=config.subject_name,
        tracker_url=config.tracker_url,
        verbose=config.verbose_summary,
    )

    try:
        sent = client.send(config.email_from, recipients, subject, body)
    except Exception as e:
        logger.error(f"Failed to send email: {e}")
        return False
    if not sent:
        return False
    logger.info(f"Email notification sent to {len(recipients)} recipients: {', '.join(recipients)}")
    return True
