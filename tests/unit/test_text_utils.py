"""
Unit tests для текстовых утилит.
"""

from datetime import datetime, timedelta, timezone

from src.shared.utils.text import extract_excerpt, slugify, to_naive_utc


def test_slugify_english():
    assert slugify("Team Wins!") == "team-wins"


def test_slugify_bengali_keeps_vowel_signs():
    assert slugify("খেলার খবর") == "খেলার-খবর"


def test_slugify_collapses_separators():
    assert slugify("  Dhaka --  Weather__today ") == "dhaka-weather-today"


def test_slugify_empty():
    assert slugify("!!!") == ""
    assert slugify(None) == ""


def test_extract_excerpt_strips_tags():
    assert extract_excerpt("<p>Short <b>news</b></p>") == "Short news"


def test_extract_excerpt_truncates():
    excerpt = extract_excerpt("a" * 200, length=10)

    assert excerpt == "a" * 10 + "..."


def test_to_naive_utc():
    aware = datetime(2024, 5, 1, 12, 0, tzinfo=timezone(timedelta(hours=6)))

    assert to_naive_utc(aware) == datetime(2024, 5, 1, 6, 0)
    assert to_naive_utc(None) is None
    naive = datetime(2024, 5, 1)
    assert to_naive_utc(naive) is naive
