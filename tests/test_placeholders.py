import json
import os
import shutil
import tempfile
import unittest
from datetime import date

from mediatracker.records.appearance_types import AppearanceCandidate
from mediatracker.records.placeholders import (
    append_placeholders,
    build_placeholder_records,
    glyph_for_source,
    next_identifier_floor,
)
from mediatracker.storage.appearances_store import AppearanceStore


FIXTURE = os.path.join(os.path.dirname(__file__), "fixtures", "appearances_sample.json")


def candidate(url, source="Bismarck Tribune"):
    return AppearanceCandidate(title="Bachmeier story", url=url, date="2025-01-08", source=source)


class TestGlyphs(unittest.TestCase):
    def test_glyph_for_source(self):
        self.assertEqual(glyph_for_source("Channel 4 TV News"), ("\U0001F4FA", "TV"))
        self.assertEqual(glyph_for_source("KXYZ Radio"), ("\U0001F4FB", "Radio"))
        self.assertEqual(glyph_for_source("Bismarck Tribune"), ("\U0001F4F0", "Print"))
        self.assertEqual(glyph_for_source(None), ("\U0001F4F0", "Print"))


class TestBuildPlaceholderRecords(unittest.TestCase):
    def test_ids_follow_max_in_candidate_order(self):
        cands = [candidate("https://example.com/1"), candidate("https://example.com/2"), candidate("https://example.com/3")]
        records = build_placeholder_records(cands, 5)
        self.assertEqual([r.id for r in records], [6, 7, 8])
        self.assertEqual([r.url for r in records], [c.url for c in cands])

    def test_records_are_review_flagged_placeholders(self):
        r = build_placeholder_records([candidate("https://example.com/1", source="WDAY TV")], 0)[0]
        d = r.to_dict()
        self.assertEqual(d["topic"], "TBD - Needs Review")
        self.assertEqual(d["quote"], "[Quote to be added]")
        self.assertTrue(d["needsReview"])
        self.assertEqual(d["outlet"], "WDAY TV")
        self.assertEqual(d["type"], "TV")

    def test_empty_collection_starts_at_one(self):
        self.assertEqual(next_identifier_floor([]), 0)
        self.assertEqual(build_placeholder_records([candidate("u")], next_identifier_floor([]))[0].id, 1)


class TestAppendPlaceholders(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, "appearances.json")
        shutil.copy(FIXTURE, self.path)
        self.store = AppearanceStore(self.path)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_appends_and_updates_last_updated(self):
        collection = self.store.load()
        added = append_placeholders(self.store, collection, [candidate("https://example.com/new")], today=date(2025, 1, 10))
        self.assertEqual([r.id for r in added], [6])

        with open(self.path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        self.assertEqual(payload["lastUpdated"], "2025-01-10")
        self.assertEqual(len(payload["appearances"]), 5)
        self.assertEqual(payload["appearances"][-1]["url"], "https://example.com/new")
        self.assertEqual(payload["officeStartDate"], "2025-01-01")

    def test_no_candidates_leaves_file_untouched(self):
        with open(self.path, "rb") as f:
            before = f.read()
        collection = self.store.load()
        self.assertEqual(append_placeholders(self.store, collection, [], today=date(2025, 1, 10)), [])
        with open(self.path, "rb") as f:
            self.assertEqual(f.read(), before)
        self.assertEqual(collection.last_updated, "2025-01-06")


if __name__ == "__main__":
    unittest.main()
