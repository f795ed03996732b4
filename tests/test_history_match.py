"""
Unit tests for histsearch.history_match
"""
import pytest

from histsearch.history_match import dedupe, matches, ordered_matches, select_lines
from histsearch.history_reader import HistoryLine


def make_lines(texts):
    return [HistoryLine(i, t, t.encode("utf-8")) for i, t in enumerate(texts, start=1)]


class TestMatches:
    """Test the all-terms predicate."""

    def test_all_terms(self):
        assert matches("docker exec -it a", ["docker", "-it"])
        assert not matches("docker exec a", ["docker", "-it"])

    def test_empty_terms(self):
        """No terms match every line."""
        assert matches("", [])
        assert matches("anything", ())

    def test_case_sensitive(self):
        assert not matches("Docker ps", ["docker"])

    def test_no_word_boundaries(self):
        assert matches("dockerfile", ["docker", "file"])

    def test_order_independent(self):
        """Terms are independent substring tests."""
        assert matches("b a", ["a", "b"])
        assert matches("a b", ["b", "a"])

    def test_overlapping_terms(self):
        """The same occurrence may satisfy several terms."""
        assert matches("ab", ["ab", "b", "ab"])

    def test_timestamp_is_searchable(self):
        assert matches(": 1700000000:0;ls", ["1700", "ls"])

    @pytest.mark.parametrize("text,terms", [
        ("rm -rf /tmp/x", ["rm", "-rf"]),
        ("echo $HOME", ["$HOME"]),
        ("grep 'a\\b'", ["a\\b"]),
        ("ünïcode ✓", ["✓", "ü"]),
    ])
    def test_special_characters(self, text, terms):
        assert matches(text, terms)


class TestOrderedMatches:
    """Test the ordered predicate."""

    def test_in_order(self):
        assert ordered_matches("git commit -m x", ["git", "-m"])

    def test_out_of_order(self):
        assert not ordered_matches("git commit -m x", ["-m", "git"])

    def test_no_overlap(self):
        """Each term needs its own occurrence."""
        assert not ordered_matches("ab", ["ab", "b"])
        assert ordered_matches("abb", ["ab", "b"])

    def test_empty_terms(self):
        assert ordered_matches("x", [])


class TestDedupe:
    """Test duplicate suppression."""

    def test_first_occurrence_kept(self):
        assert list(dedupe(["a", "b", "a", "c", "b"])) == ["a", "b", "c"]

    def test_whitespace_matters(self):
        assert list(dedupe(["ls", "ls ", "ls"])) == ["ls", "ls "]

    def test_idempotent(self):
        once = list(dedupe(["x", "y", "x", "x", "z", "y"]))
        assert list(dedupe(once)) == once

    def test_history_lines(self):
        """HistoryLines are compared by text, the first one is kept."""
        result = list(dedupe(make_lines(["ls", "pwd", "ls"])))
        assert [(l.number, l.text) for l in result] == [(1, "ls"), (2, "pwd")]


class TestSelectLines:
    """Test line selection."""

    def test_docker_example(self):
        lines = make_lines(["docker exec -it a", "docker run -it b", "ls"])
        result = select_lines(lines, ["docker", "-it"])
        assert [l.text for l in result] == ["docker exec -it a", "docker run -it b"]

    def test_empty_terms_select_all(self):
        lines = make_lines(["a", "b"])
        assert list(select_lines(lines, [])) == lines

    def test_dedupe(self):
        lines = make_lines(["git push", "ls", "git push", "git pull"])
        result = select_lines(lines, ["git"], dedupe_lines=True)
        assert [l.text for l in result] == ["git push", "git pull"]

    def test_ordered(self):
        lines = make_lines(["tar -x -f a", "tar -f a -x"])
        result = select_lines(lines, ["-x", "-f"], ordered=True)
        assert [l.text for l in result] == ["tar -x -f a"]

    def test_invalid_lines_never_match(self):
        """Lines that aren't valid UTF-8 are skipped, even with no terms."""
        lines = [HistoryLine(1, "ls �", b"ls \xff", True), HistoryLine(2, "ls", b"ls")]
        assert [l.number for l in select_lines(lines, [])] == [2]
        assert [l.number for l in select_lines(lines, ["ls"])] == [2]
