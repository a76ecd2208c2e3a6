"""Tests for edit distance, nearest-name matching and corpus loading."""

import json

import pytest

from app.services.errors import CorpusLoadError
from app.services.fuzzy import edit_distance, load_corpus, nearest
from app.settings import DEFAULT_HERO_NAMES_PATH


class TestEditDistance:
    """Tests for Levenshtein distance."""

    def test_identity_is_zero(self):
        assert edit_distance("Batman", "Batman") == 0
        assert edit_distance("", "") == 0

    def test_empty_to_string_is_length(self):
        assert edit_distance("", "Hulk") == 4
        assert edit_distance("Storm", "") == 5

    def test_known_distances(self):
        assert edit_distance("kitten", "sitting") == 3
        assert edit_distance("Batmon", "Batman") == 1
        assert edit_distance("flaw", "lawn") == 2

    def test_case_sensitive(self):
        assert edit_distance("batman", "Batman") == 1

    @pytest.mark.parametrize(
        "a,b",
        [
            ("Batmon", "Superman"),
            ("", "Thor"),
            ("Spider-Man", "Spiderman"),
            ("Iron Man", "Ant-Man"),
        ],
    )
    def test_symmetric(self, a, b):
        assert edit_distance(a, b) == edit_distance(b, a)


class TestNearest:
    """Tests for nearest-name lookup."""

    def test_batmon_resolves_to_batman(self):
        assert edit_distance("Batmon", "Superman") >= 4
        assert nearest("Batmon", ["Batman", "Superman"]) == "Batman"

    def test_exact_member_wins(self):
        corpus = ["Hulk", "Thor", "Storm", "Thing"]
        for name in corpus:
            assert nearest(name, corpus) == name

    def test_first_entry_wins_ties(self):
        # "Thor" -> "Thog" and "Tho" are both distance 1.
        assert nearest("Thor", ["Thog", "Tho"]) == "Thog"
        assert nearest("Thor", ["Tho", "Thog"]) == "Tho"

    def test_empty_corpus_raises(self):
        with pytest.raises(CorpusLoadError):
            nearest("Batman", [])


class TestLoadCorpus:
    """Tests for the JSON name corpus loader."""

    def test_default_corpus_loads_in_file_order(self):
        names = load_corpus(DEFAULT_HERO_NAMES_PATH)
        assert "Batman" in names
        assert "Superman" in names
        with open(DEFAULT_HERO_NAMES_PATH, encoding="utf-8") as f:
            assert names == json.load(f)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(CorpusLoadError):
            load_corpus(tmp_path / "missing.json")

    def test_malformed_file_raises(self, tmp_path):
        path = tmp_path / "names.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CorpusLoadError):
            load_corpus(path)

    def test_non_array_raises(self, tmp_path):
        path = tmp_path / "names.json"
        path.write_text('{"names": ["Batman"]}', encoding="utf-8")
        with pytest.raises(CorpusLoadError):
            load_corpus(path)

    def test_blank_entries_are_skipped(self, tmp_path):
        path = tmp_path / "names.json"
        path.write_text('["Batman", "", "  ", "Robin"]', encoding="utf-8")
        assert load_corpus(path) == ["Batman", "Robin"]
