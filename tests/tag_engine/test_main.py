"""Tests for the tag ranking CLI."""

from __future__ import annotations

import json

import pytest

from src.tag_engine.main import build_parser, main


@pytest.fixture
def listings_file(tmp_path, sample_listings):
    path = tmp_path / "listings.json"
    path.write_text(json.dumps(sample_listings, ensure_ascii=False), encoding="utf-8")
    return path


class TestCLI:
    def test_parser_defaults(self):
        args = build_parser().parse_args(["--input", "x.json"])
        assert args.variant is None
        assert args.selected == []
        assert args.limit == 0

    def test_writes_output_file(self, listings_file, tmp_path):
        out = tmp_path / "ranked.json"
        assert main(["--input", str(listings_file), "--output", str(out)]) == 0

        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["estimate"] == "1000 kr"
        assert data["total_candidates"] == 7
        assert [t["name"] for t in data["tags"]][:2] == ["travis scott", "jordan 1"]
        assert data["tags"][0]["color"] == "strong-positive"
        assert data["variant"] == "cap"

    def test_selected_tag_removed_and_penalizes_siblings(self, listings_file, tmp_path):
        out = tmp_path / "ranked.json"
        main([
            "--input", str(listings_file),
            "--selected", "Jordan 1",
            "--output", str(out),
        ])
        data = json.loads(out.read_text(encoding="utf-8"))
        by_name = {t["name"]: t for t in data["tags"]}
        assert "jordan 1" not in by_name
        assert data["selection"]["included"] == ["jordan 1"]
        # +4 price impact, -2 for 67% similarity to "jordan 1"
        assert by_name["air jordan 1"]["rank_score"] == 2.0

    def test_listing_count_to_stdout(self, listings_file, capsys):
        main(["--input", str(listings_file), "--sort", "listing_count", "--limit", "2"])
        data = json.loads(capsys.readouterr().out)
        assert [t["name"] for t in data["tags"]] == ["air max", "jordan 1"]
        assert data["sort"] == "listing_count"

    def test_excluded_names_removed(self, listings_file, tmp_path):
        out = tmp_path / "ranked.json"
        main([
            "--input", str(listings_file),
            "--exclude", "air max",
            "--variant", "spread",
            "--output", str(out),
        ])
        data = json.loads(out.read_text(encoding="utf-8"))
        assert "air max" not in [t["name"] for t in data["tags"]]
        assert data["selection"]["excluded"] == ["air max"]

    def test_missing_input_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--input", str(tmp_path / "missing.json")])
        assert exc.value.code == 2

    def test_bare_list_input(self, tmp_path, capsys):
        path = tmp_path / "tags.json"
        path.write_text(json.dumps([{"tag_name": "dunk low", "listing_count": 5, "median_price": "1000"}]), encoding="utf-8")
        main(["--input", str(path), "--estimate", "1000 kr"])
        data = json.loads(capsys.readouterr().out)
        assert [t["name"] for t in data["tags"]] == ["dunk low"]


class TestVariantSettings:
    @pytest.fixture
    def settings_file(self, tmp_path, monkeypatch):
        for var in ("TAG_EXCLUSIONS_FILE", "TAG_SORT_MODE", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)

        def _write(ranking_yaml: str):
            path = tmp_path / "settings.yaml"
            path.write_text("ranking:\n" + ranking_yaml, encoding="utf-8")
            return path

        return _write

    def _run(self, listings_file, capsys, *extra):
        main(["--input", str(listings_file), *extra])
        return json.loads(capsys.readouterr().out)

    def test_settings_variant_used_without_flag(self, listings_file, settings_file, capsys):
        path = settings_file("  polarity_filtering: spread\n  demote_excluded: false\n")
        data = self._run(listings_file, capsys, "--settings", str(path))
        names = [t["name"] for t in data["tags"]]
        assert data["variant"] == "spread"
        assert "str 42" not in names
        assert "barn" not in names

    def test_spread_flag_keeps_other_settings(self, listings_file, settings_file, capsys):
        path = settings_file("  demote_excluded: false\n")
        data = self._run(listings_file, capsys, "--settings", str(path), "--variant", "spread")
        names = [t["name"] for t in data["tags"]]
        assert data["variant"] == "spread"
        assert "str 42" not in names
        assert "barn" not in names

    def test_spread_flag_skips_similarity_penalty(self, listings_file, settings_file, capsys):
        path = settings_file("  demote_excluded: true\n")
        data = self._run(
            listings_file, capsys,
            "--settings", str(path), "--variant", "spread", "--selected", "jordan 1",
        )
        by_name = {t["name"]: t for t in data["tags"]}
        # +4 price impact, no penalty for similarity to "jordan 1"
        assert by_name["air jordan 1"]["rank_score"] == 4.0
        assert "str 42" in by_name

    def test_cap_flag_overrides_spread_settings(self, listings_file, settings_file, capsys):
        path = settings_file(
            "  polarity_filtering: spread\n"
            "  apply_similarity_penalty: false\n"
            "  demote_excluded: false\n"
        )
        data = self._run(
            listings_file, capsys,
            "--settings", str(path), "--variant", "cap", "--selected", "jordan 1",
        )
        by_name = {t["name"]: t for t in data["tags"]}
        assert data["variant"] == "cap"
        assert by_name["air jordan 1"]["rank_score"] == 2.0
        assert "str 42" not in by_name
