import pytest

from shardrouter.keyrange import (
    MAX_NUM_KEY,
    DateRangeError,
    NumKeyRange,
    RoutingError,
    parse_day_range,
    parse_month_range,
    parse_num_sharding,
    parse_year_range,
)


def test_parse_year_range():
    assert parse_year_range("2014-2017") == [2014, 2015, 2016, 2017]


def test_parse_year_range_reversed():
    assert parse_year_range("2017-2013") == [2013, 2014, 2015, 2016, 2017]


def test_parse_year_single():
    assert parse_year_range("2015") == [2015]


def test_parse_month_range():
    assert parse_month_range("201602-201610") == [
        201602, 201603, 201604, 201605, 201606, 201607, 201608, 201609, 201610,
    ]


def test_parse_month_range_reversed_across_year():
    assert parse_month_range("201603-201511") == [
        201511, 201512, 201601, 201602, 201603,
    ]


def test_parse_month_single():
    assert parse_month_range("201512") == [201512]


def test_parse_day_range_leap_year():
    assert parse_day_range("20160227-20160304") == [
        20160227, 20160228, 20160229, 20160301, 20160302, 20160303, 20160304,
    ]


def test_parse_day_range_reversed():
    assert parse_day_range("20160304-20160301") == [
        20160301, 20160302, 20160303, 20160304,
    ]


def test_parse_day_single():
    assert parse_day_range("20151201") == [20151201]


@pytest.mark.parametrize(
    "func, value",
    [
        (parse_day_range, "2016022"),
        (parse_day_range, "20160227-2016030"),
        (parse_day_range, "2016022x"),
        (parse_day_range, "20161301-20161302"),
        (parse_month_range, "20160"),
        (parse_month_range, "201602-20161"),
        (parse_month_range, "2016ab-201612"),
        (parse_year_range, "201"),
        (parse_year_range, "abcd"),
        (parse_year_range, "2014-20x7"),
    ],
)
def test_illegal_ranges(func, value):
    with pytest.raises(DateRangeError):
        func(value)


def test_date_range_error_is_routing_error():
    with pytest.raises(RoutingError):
        parse_year_range("12")


def test_num_key_range_contains():
    r = NumKeyRange(100, 200)
    assert r.contains(100)
    assert r.contains(199)
    assert not r.contains(200)
    assert not r.contains(99)


def test_num_key_range_unbounded_end():
    r = NumKeyRange(0, MAX_NUM_KEY)
    assert r.contains(MAX_NUM_KEY)


def test_num_key_range_text():
    r = NumKeyRange(0, 10000)
    assert r.map_key() == "0-10000"
    assert str(r) == "{Start: 0, End: 10000}"


def test_parse_num_sharding():
    ranges = parse_num_sharding([2, 1], 100)
    assert ranges == [
        NumKeyRange(0, 100),
        NumKeyRange(100, 200),
        NumKeyRange(200, 300),
    ]


def test_parse_num_sharding_is_contiguous():
    ranges = parse_num_sharding([4, 4, 4], 10000)
    assert len(ranges) == 12
    for left, right in zip(ranges, ranges[1:]):
        assert left.end == right.start