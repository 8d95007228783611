from datetime import timezone

import pytest

from shardrouter.keyrange import MAX_NUM_KEY, NumKeyRange, RoutingError, parse_num_sharding
from shardrouter.shard import (
    DateDayShard,
    DateMonthShard,
    DateYearShard,
    DefaultShard,
    HashShard,
    KeyOutOfRangeError,
    NumRangeShard,
    Shard,
    ShardKeyError,
    encode_value,
    hash_value,
    num_value,
)

UTC = timezone.utc
TIMESTAMP = 1457082679


def test_encode_int_is_big_endian_uint64():
    assert encode_value(1) == b"\x00" * 7 + b"\x01"
    assert len(encode_value(12345)) == 8


def test_encode_negative_wraps():
    assert encode_value(-1) == b"\xff" * 8


def test_encode_text_and_bytes():
    assert encode_value("abc") == b"abc"
    assert encode_value(b"\x01\x02") == b"\x01\x02"


def test_encode_rejects_other_types():
    with pytest.raises(ShardKeyError):
        encode_value(1.5)


def test_hash_int_is_identity():
    assert hash_value(11) == 11


def test_hash_negative_wraps_to_uint64():
    assert hash_value(-1) == 2**64 - 1


def test_hash_decimal_text_is_its_number():
    assert hash_value("123") == 123


def test_hash_crc32_check_value():
    assert hash_value("123456789x"[:9] + "") == 123456789
    assert hash_value(b"123456789") == 0xCBF43926


def test_hash_text_and_bytes_agree():
    assert hash_value("abc") == hash_value(b"abc")
    assert 0 <= hash_value("abc") < 2**32


def test_hash_rejects_other_types():
    with pytest.raises(ShardKeyError):
        hash_value(None)


def test_num_value_forms():
    assert num_value(42) == 42
    assert num_value("42") == 42
    assert num_value(b"-7") == -7


def test_num_value_wraps_to_int64():
    assert num_value(2**64 - 1) == -1


@pytest.mark.parametrize("bad", ["x", "1.5", "", b"abc"])
def test_num_value_invalid_text(bad):
    with pytest.raises(ShardKeyError):
        num_value(bad)


def test_num_value_rejects_other_types():
    with pytest.raises(ShardKeyError):
        num_value(2.0)


def test_shard_key_error_is_routing_error():
    with pytest.raises(RoutingError):
        num_value("x")


def test_shard_is_abstract():
    with pytest.raises(TypeError):
        Shard()


def test_hash_shard():
    shard = HashShard(32)
    assert shard.find_for_key(11) == 11
    assert shard.find_for_key(43) == 11
    assert 0 <= shard.find_for_key("abc") < 32


def _range_shard():
    return NumRangeShard(parse_num_sharding([4, 4, 4], 10000))


def test_num_range_shard_boundaries():
    shard = _range_shard()
    assert shard.find_for_key(10000 - 1) == 0
    assert shard.find_for_key(10000) == 1
    assert shard.find_for_key(20000) == 2
    assert shard.find_for_key("10000") == 1


def test_num_range_shard_out_of_range():
    shard = _range_shard()
    with pytest.raises(KeyOutOfRangeError):
        shard.find_for_key(-1)
    with pytest.raises(KeyOutOfRangeError):
        shard.find_for_key(120000)


def test_num_range_shard_unbounded_end():
    shard = NumRangeShard([NumKeyRange(0, 100), NumKeyRange(100, MAX_NUM_KEY)])
    assert shard.find_for_key(MAX_NUM_KEY) == 1


def test_num_range_equal_start_and_stop():
    shard = _range_shard()
    assert shard.equal_start(10000, 1)
    assert not shard.equal_start(10001, 1)
    assert shard.equal_stop(20000, 1)
    assert not shard.equal_stop(10000, 1)


def test_date_year_shard():
    shard = DateYearShard(UTC)
    assert shard.find_for_key(TIMESTAMP) == 2016
    assert shard.find_for_key("2015-03-06 13:37:26") == 2015
    assert shard.find_for_key("2015-03-06") == 2015


def test_date_year_shard_invalid():
    with pytest.raises(ShardKeyError):
        DateYearShard(UTC).find_for_key("abcd-01")
    with pytest.raises(ShardKeyError):
        DateYearShard(UTC).find_for_key(1.0)


def test_date_month_shard():
    shard = DateMonthShard(UTC)
    assert shard.find_for_key(TIMESTAMP) == 201603
    assert shard.find_for_key("2016-05-07 12:23:56") == 201605
    assert shard.find_for_key("2016-05-06") == 201605


def test_date_month_shard_invalid():
    with pytest.raises(ShardKeyError):
        DateMonthShard(UTC).find_for_key("2016-05")
    with pytest.raises(ShardKeyError):
        DateMonthShard(UTC).find_for_key("2016-xx-06")


def test_date_day_shard():
    shard = DateDayShard(UTC)
    assert shard.find_for_key(TIMESTAMP) == 20160304
    assert shard.find_for_key("2016-03-07 12:23:56") == 20160307
    assert shard.find_for_key("2016-03-07") == 20160307


def test_date_day_shard_invalid():
    with pytest.raises(ShardKeyError):
        DateDayShard(UTC).find_for_key("2016-03")
    with pytest.raises(ShardKeyError):
        DateDayShard(UTC).find_for_key(b"2016-03-07")


def test_date_shards_agree_on_timestamp():
    day = DateDayShard(UTC).find_for_key(TIMESTAMP)
    month = DateMonthShard(UTC).find_for_key(TIMESTAMP)
    year = DateYearShard(UTC).find_for_key(TIMESTAMP)
    assert day // 100 == month
    assert month // 100 == year


def test_default_shard():
    shard = DefaultShard()
    assert shard.find_for_key(11) == 0
    assert shard.find_for_key("anything") == 0