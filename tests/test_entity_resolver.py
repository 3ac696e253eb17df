# tests/test_entity_resolver.py
from __future__ import annotations

from entity_resolver import EntityResolver, names_match


def _resolver():
    return EntityResolver(
        [
            ("s1", "James Miller"),
            ("s2", "Vanessa Reid"),
            ("s3", "Dr. Harold Thompson"),
        ]
    )


def test_exact_name_and_id():
    resolver = _resolver()
    assert resolver.resolve("Vanessa Reid") == "s2"
    assert resolver.resolve("vanessa reid") == "s2"
    assert resolver.resolve("s3") == "s3"


def test_partial_mentions_resolve_both_ways():
    resolver = _resolver()
    assert resolver.resolve("Thompson") == "s3"
    assert resolver.resolve("James Miller, the security guard") == "s1"


def test_unknown_and_blank_mentions():
    resolver = _resolver()
    assert resolver.resolve("The butler") is None
    assert resolver.resolve("") is None
    assert resolver.resolve("   ") is None
    assert resolver.resolve(None) is None


def test_first_listed_wins_on_duplicate_names():
    resolver = EntityResolver([("a", "Alex"), ("b", "alex")])
    assert len(resolver) == 1
    assert resolver.resolve("ALEX") == "a"


def test_insertion_order_breaks_substring_ties():
    resolver = EntityResolver([("a", "Ann Lee"), ("b", "Ann Leeds")])
    assert resolver.resolve("Ann") == "a"


def test_mentions_in_text_reports_positions():
    text = "Footage puts Vanessa Reid near the vault; Dr. Harold Thompson left early."
    mentions = _resolver().mentions_in(text)
    assert [m.entity_id for m in mentions] == ["s2", "s3"]
    assert text[mentions[0].start:mentions[0].end] == "Vanessa Reid"


def test_names_match_rejects_blanks():
    assert names_match("Reid", "Vanessa Reid")
    assert not names_match("", "Vanessa Reid")
    assert not names_match("Reid", "")
