import pytest

from weekendtracer.rng import Rng, pcg_hash


def test_pcg_hash_is_deterministic_and_32_bit():
    for value in (0, 1, 134537, 0xFFFFFFFF):
        h = pcg_hash(value)
        assert 0 <= h <= 0xFFFFFFFF
        assert pcg_hash(value) == h


def test_pcg_hash_spreads_nearby_inputs():
    hashes = {pcg_hash(v) for v in range(256)}
    assert len(hashes) == 256


def test_first_int_from_zero_seed_is_the_increment():
    rng = Rng(0)
    assert rng.next_int() == 1013904223
    assert rng.seed == 1013904223


def test_next_int_stores_state():
    rng = Rng(42)
    for _ in range(10):
        value = rng.next_int()
        assert rng.seed == value
        assert 0 <= value <= 0xFFFFFFFF


def test_seed_is_masked_to_32_bits():
    assert Rng(2**32 + 5).seed == 5
    assert Rng(-1).seed == 0xFFFFFFFF


def test_same_seed_same_sequence():
    a = Rng(99)
    b = Rng(99)
    assert [a.next_float() for _ in range(20)] == [b.next_float() for _ in range(20)]


def test_next_float_in_unit_interval():
    rng = Rng(7)
    values = [rng.next_float() for _ in range(1000)]
    assert all(0.0 <= v < 1.0 for v in values)
    assert 0.4 < sum(values) / len(values) < 0.6


def test_vectors_consume_floats_in_order():
    a = Rng(12345)
    b = Rng(12345)
    pair = a.next_vec2()
    assert pair == (b.next_float(), b.next_float())
    triple = a.next_vec3()
    assert tuple(triple) == pytest.approx((b.next_float(), b.next_float(), b.next_float()))
    assert a.seed == b.seed