import pytest

from directives import effective_quality, parse_directives


def test_empty_querystring():
    d = parse_directives("")
    assert d.format is None
    assert d.width is None and d.height is None
    assert d.quality is None
    assert d.cropped is False
    assert d.resize_requested is False


def test_parses_all_directives():
    d = parse_directives("width=300&height=200&quality=50&format=WebP&cropped")
    assert (d.width, d.height, d.quality) == (300, 200, 50)
    assert d.format == "webp"
    assert d.cropped is True
    assert d.resize_requested is True


def test_first_value_wins():
    assert parse_directives("width=100&width=200").width == 100


@pytest.mark.parametrize("raw", ["abc", "", "0", "-20"])
def test_unusable_width_is_absent_not_zero(raw):
    d = parse_directives(f"width={raw}")
    assert d.width is None
    assert d.resize_requested is True


def test_leading_integer_is_used():
    assert parse_directives("height=150px").height == 150


@pytest.mark.parametrize(
    "query, expected",
    [
        ("quality=999", 100),
        ("quality=-50", 0),
        ("quality=abc", 82),
        ("", 82),
        ("quality=0", 0),
        ("quality=50", 50),
    ],
)
def test_effective_quality(query, expected):
    assert effective_quality(parse_directives(query)) == expected


def test_cropped_with_value_still_counts():
    assert parse_directives("cropped=false").cropped is True
