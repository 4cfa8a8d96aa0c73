# tests/test_seed.py

"""
Seed Script Tests - app/scripts/seed_celebrities.py
"""

import json
from unittest.mock import patch

import pytest

from app.scripts.seed_celebrities import DEFAULT_SEED, load_seed, main, seed


@pytest.fixture
def seeded_into(empty_store):
    with patch("app.core.dependencies.get_celebrity_repository", return_value=empty_store):
        yield empty_store


class TestSeed:

    def test_default_seed_inserts_all(self, seeded_into):
        counts = seed(DEFAULT_SEED)
        assert counts == {"inserted": len(DEFAULT_SEED), "skipped": 0, "invalid": 0}
        assert seeded_into.get_by_id("robin-williams").score == pytest.approx(0.05)

    def test_reseeding_skips_existing(self, seeded_into):
        seed(DEFAULT_SEED)
        counts = seed(DEFAULT_SEED)
        assert counts["inserted"] == 0
        assert counts["skipped"] == len(DEFAULT_SEED)
        assert len(seeded_into.list_entities()) == len(DEFAULT_SEED)

    def test_invalid_entries_are_counted(self, seeded_into):
        entries = [
            {"name": "Fine", "score": 0.3},
            {"name": "Too Evil", "score": 1.5},
            {"name": "", "score": 0.2},
            {"name": "Negative", "score": 0.2, "count": -1},
        ]
        counts = seed(entries)
        assert counts == {"inserted": 1, "skipped": 0, "invalid": 3}

    def test_non_object_entries_are_counted(self, seeded_into):
        counts = seed(["not-a-dict", 42, None, {"name": "Fine", "score": 0.3}])
        assert counts == {"inserted": 1, "skipped": 0, "invalid": 3}

    def test_main_counts_non_object_entries(self, seeded_into, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps(["x"]))
        assert main(["--file", str(path)]) == 1
        assert seeded_into.list_entities() == []

    def test_dry_run_writes_nothing(self, seeded_into):
        counts = seed(DEFAULT_SEED, dry_run=True)
        assert counts["inserted"] == len(DEFAULT_SEED)
        assert seeded_into.list_entities() == []


class TestCli:

    def test_load_seed_requires_list(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps({"name": "Not a list"}))
        with pytest.raises(ValueError):
            load_seed(path)

    def test_main_with_file(self, seeded_into, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps([{"id": "a", "name": "A", "score": 0.1}]))
        assert main(["--file", str(path)]) == 0
        assert seeded_into.get_by_id("a").name == "A"

    def test_main_fails_on_invalid(self, seeded_into, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps([{"name": "Bad", "score": 2}]))
        assert main(["--file", str(path)]) == 1
