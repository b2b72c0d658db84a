"""Tests for bank registry and pool loading, including fallback behaviour."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest

from benefitquiz.data.fallback import fallback_questions
from benefitquiz.data.loader import default_registry, load_bank, load_pool, load_registry
from benefitquiz.data.schemas import DIFFICULTIES, TOPICS
from benefitquiz.errors import BankUnavailableError

from conftest import ROOT, raw_record


def _fake_response(body: bytes) -> MagicMock:
    resp = MagicMock()
    resp.read.return_value = body
    cm = MagicMock()
    cm.__enter__.return_value = resp
    cm.__exit__.return_value = False
    return cm


class TestRegistry:
    def test_relative_paths_resolve_against_registry(self, bank_dir):
        registry = load_registry(bank_dir / "banks.yaml")
        assert set(registry) == {"basics", "funding", "compliance", "sales"}
        assert registry["basics"] == str((bank_dir / "banks" / "bank.basics.json").resolve())

    def test_missing_registry_uses_default_layout(self, tmp_path):
        registry = load_registry(tmp_path / "nope.yaml")
        assert registry == default_registry()
        assert set(registry) == set(TOPICS)

    def test_unknown_topics_ignored(self, tmp_path):
        (tmp_path / "r.yaml").write_text(
            "banks:\n  basics: a.json\n  astrology: b.json\n", encoding="utf-8"
        )
        registry = load_registry(tmp_path / "r.yaml")
        assert list(registry) == ["basics"]

    def test_urls_kept_verbatim(self, tmp_path):
        (tmp_path / "r.yaml").write_text(
            "banks:\n  sales: https://example.com/bank.sales.json\n", encoding="utf-8"
        )
        assert load_registry(tmp_path / "r.yaml") == {"sales": "https://example.com/bank.sales.json"}

    def test_empty_registry_file(self, tmp_path):
        (tmp_path / "r.yaml").write_text("", encoding="utf-8")
        assert load_registry(tmp_path / "r.yaml") == {}


class TestLoadBank:
    def test_valid_bank(self, bank_dir):
        qs = load_bank(str(bank_dir / "banks" / "bank.basics.json"))
        assert len(qs) == 4
        assert all(q.topic == "basics" and q.difficulty == "easy" for q in qs)
        assert all(q.source == "bank" for q in qs)

    def test_missing_file(self, tmp_path):
        with pytest.raises(BankUnavailableError) as exc:
            load_bank(str(tmp_path / "missing.json"))
        assert exc.value.location == str(tmp_path / "missing.json")

    def test_corrupt_json(self, bank_dir):
        with pytest.raises(BankUnavailableError):
            load_bank(str(bank_dir / "banks" / "bank.compliance.json"))

    def test_non_list_payload(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text(json.dumps({"questions": []}), encoding="utf-8")
        with pytest.raises(BankUnavailableError, match="JSON array"):
            load_bank(str(path))

    def test_bad_records_discarded_individually(self, tmp_path):
        rows = [
            raw_record("sales", "easy", 0),
            {"q": "No choices", "answer": 0},
            raw_record("sales", "expert", 1),
            "not a record",
        ]
        path = tmp_path / "mixed.json"
        path.write_text(json.dumps(rows), encoding="utf-8")
        qs = load_bank(str(path), topic="sales")
        assert [q.difficulty for q in qs] == ["easy", "expert"]

    def test_topic_fills_missing_field(self, tmp_path):
        row = raw_record("funding", "easy", 0)
        del row["topic"]
        path = tmp_path / "b.json"
        path.write_text(json.dumps([row]), encoding="utf-8")
        assert load_bank(str(path), topic="funding")[0].topic == "funding"

    def test_url_bank(self):
        body = json.dumps([raw_record("ancillary", "easy", 0)]).encode("utf-8")
        with patch("benefitquiz.data.loader.urllib.request.urlopen",
                   return_value=_fake_response(body)) as mock_open:
            qs = load_bank("https://example.com/bank.ancillary.json", timeout_s=2.5)
        assert len(qs) == 1
        req = mock_open.call_args[0][0]
        assert req.full_url == "https://example.com/bank.ancillary.json"
        assert mock_open.call_args[1]["timeout"] == 2.5

    def test_url_failure(self):
        with patch("benefitquiz.data.loader.urllib.request.urlopen",
                   side_effect=OSError("connection refused")):
            with pytest.raises(BankUnavailableError):
                load_bank("https://example.com/bank.sales.json")


class TestLoadPool:
    def test_single_topic(self, bank_dir):
        registry = load_registry(bank_dir / "banks.yaml")
        pool = load_pool("funding", registry=registry)
        assert len(pool) == 3
        assert {q.topic for q in pool} == {"funding"}

    @pytest.mark.parametrize("topic", ["compliance", "sales", "ancillary"])
    def test_failures_fall_back(self, bank_dir, topic):
        # corrupt, missing file, and unregistered respectively
        registry = load_registry(bank_dir / "banks.yaml")
        pool = load_pool(topic, registry=registry)
        assert [q.text for q in pool] == [q.text for q in fallback_questions()]
        assert all(q.source == "fallback" for q in pool)

    def test_empty_bank_falls_back(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]", encoding="utf-8")
        pool = load_pool("basics", registry={"basics": str(path)})
        assert all(q.source == "fallback" for q in pool)

    def test_mixed_keeps_successful_banks(self, bank_dir):
        registry = load_registry(bank_dir / "banks.yaml")
        pool = load_pool("mixed", registry=registry)
        assert len(pool) == 7
        assert {q.topic for q in pool} == {"basics", "funding"}
        assert all(q.source == "bank" for q in pool)

    def test_mixed_all_failing_falls_back(self, tmp_path):
        registry = {t: str(tmp_path / f"missing.{t}.json") for t in TOPICS}
        pool = load_pool("mixed", registry=registry)
        assert pool
        assert all(q.source == "fallback" for q in pool)

    def test_mixed_empty_registry(self):
        assert all(q.source == "fallback" for q in load_pool("mixed", registry={}))

    def test_no_dedup_at_load(self, tmp_path):
        row = raw_record("basics", "easy", 0)
        path = tmp_path / "dups.json"
        path.write_text(json.dumps([row, row, row]), encoding="utf-8")
        assert len(load_pool("basics", registry={"basics": str(path)})) == 3


class TestShippedBanks:
    def test_shipped_registry_loads_every_topic(self):
        registry = load_registry(ROOT / "data" / "banks.yaml")
        assert set(registry) == set(TOPICS)
        for topic in TOPICS:
            qs = load_bank(registry[topic], topic=topic)
            assert qs, topic
            assert {q.topic for q in qs} == {topic}
            assert {q.difficulty for q in qs} <= set(DIFFICULTIES)
