"""Unit tests for the per-query mode history."""
from searchbar.search.history import ModeHistory, decode_block, encode_modes
from searchbar.search.modes import ModeSet

CASE = ModeSet(case_sensitive=True)
REGEX_MULTI = ModeSet(regex=True, multi_line=True)


class TestEncoding:
    def test_encode(self):
        assert encode_modes(ModeSet()) == "...."
        assert encode_modes(CASE) == "!..."
        assert encode_modes(REGEX_MULTI) == "..!!"

    def test_decode_block(self):
        assert decode_block("!..!") == ModeSet(case_sensitive=True, multi_line=True)
        assert decode_block("!!!") == ModeSet()
        assert decode_block("") == ModeSet()

    def test_unknown_chars_are_off(self):
        assert decode_block("!x?!") == ModeSet(case_sensitive=True, multi_line=True)


class TestSerialize:
    def test_blocks_in_query_order(self):
        history = ModeHistory({"a": CASE, "b": REGEX_MULTI})
        assert history.serialize(["b", "a"], ModeSet()) == "..!!,!..."

    def test_missing_entries_take_current_and_are_stored(self):
        history = ModeHistory({"a": CASE})
        assert history.serialize(["a", "b"], ModeSet(regex=True)) == "!...,..!."
        assert history.lookup("b") == ModeSet(regex=True)

    def test_empty_list(self):
        assert ModeHistory().serialize([], CASE) == ""

    def test_round_trip(self):
        queries = ["foo", "bar", "baz"]
        history = ModeHistory({"foo": CASE, "bar": REGEX_MULTI, "baz": ModeSet()})
        restored = ModeHistory.deserialize(history.serialize(queries, ModeSet()), queries)
        assert restored == history


class TestDeserialize:
    def test_bad_block_length_gives_defaults(self):
        history = ModeHistory.deserialize("!!!,!..!", ["a", "b"])
        assert history.lookup("a") == ModeSet()
        assert history.lookup("b") == ModeSet(case_sensitive=True, multi_line=True)

    def test_zips_to_shorter_side(self):
        history = ModeHistory.deserialize("!...,....,..!.", ["a"])
        assert len(history) == 1
        history = ModeHistory.deserialize("!...", ["a", "b"])
        assert "b" not in history
        assert history.lookup("a") == CASE

    def test_empty_string(self):
        history = ModeHistory.deserialize("", ["a"])
        assert history.lookup("a") == ModeSet()
        assert ModeHistory.deserialize("", []).lookup("a") is None


class TestRebuildAndStore:
    def test_current_query_takes_current_modes(self):
        history = ModeHistory({"a": CASE, "b": CASE})
        rebuilt, serialized = history.rebuild_and_store(["a", "b"], "b", REGEX_MULTI)
        assert rebuilt.lookup("a") == CASE
        assert rebuilt.lookup("b") == REGEX_MULTI
        assert serialized == "!...,..!!"

    def test_new_queries_take_current_modes(self):
        rebuilt, serialized = ModeHistory().rebuild_and_store(["x", "y"], "z", CASE)
        assert rebuilt.lookup("x") == CASE
        assert serialized == "!...,!..."

    def test_drops_queries_no_longer_listed(self):
        history = ModeHistory({"old": CASE, "a": ModeSet()})
        rebuilt, _ = history.rebuild_and_store(["a"], "", CASE)
        assert rebuilt.lookup("old") is None
        assert rebuilt.lookup("a") == ModeSet()

    def test_original_left_untouched(self):
        history = ModeHistory({"a": CASE})
        history.rebuild_and_store(["a"], "a", ModeSet())
        assert history.lookup("a") == CASE
