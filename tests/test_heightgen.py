import math

import pytest

from flightsim.heightgen import AMPLITUDE, ROUGHNESS, MT19937, HeightGenerator, interpolate


def test_mt19937_default_first_output():
    assert MT19937(5489).next_u32() == 3499211612


def test_mt19937_ten_thousandth_output():
    gen = MT19937(5489)
    value = None
    for _ in range(10000):
        value = gen.next_u32()
    assert value == 4123659995


def test_mt19937_seed_wraps_modulo_2_32():
    assert MT19937(-1).next_u32() == MT19937(2**32 - 1).next_u32()
    assert MT19937(2**32 + 7).next_u32() == MT19937(7).next_u32()


def test_mt19937_same_seed_same_sequence():
    a = MT19937(42)
    b = MT19937(42)
    assert [a.next_u32() for _ in range(700)] == [b.next_u32() for _ in range(700)]


def test_mt19937_floats_in_unit_interval():
    gen = MT19937(123)
    values = [gen.next_float() for _ in range(1000)]
    assert all(0.0 <= v < 1.0 for v in values)
    assert max(values) - min(values) > 0.5


def test_interpolate_endpoints_and_midpoint():
    assert interpolate(2.0, 6.0, 0.0) == pytest.approx(2.0)
    assert interpolate(2.0, 6.0, 1.0) == pytest.approx(6.0)
    assert interpolate(2.0, 6.0, 0.5) == pytest.approx(4.0)


def test_noise_matches_fresh_generator_first_draw():
    gen = HeightGenerator(seed=1000)
    expected = MT19937(1000 + 3 * 233 + 2 * 23333).next_float() * 2.0 - 1.0
    assert gen.noise(3, 2) == pytest.approx(expected, abs=1e-6)


def test_noise_with_negative_coordinates_wraps_seed():
    gen = HeightGenerator(seed=0)
    expected = MT19937(2**32 - 233).next_float() * 2.0 - 1.0
    assert gen.noise(-1, 0) == pytest.approx(expected, abs=1e-6)


def test_noise_bounded_and_deterministic():
    a = HeightGenerator(seed=77)
    b = HeightGenerator(seed=77)
    for x in range(-5, 5):
        for z in range(-5, 5):
            assert -1.0 <= a.noise(x, z) < 1.0
            assert a.noise(x, z) == b.noise(x, z)


def test_smooth_noise_bounded():
    gen = HeightGenerator(seed=5)
    assert all(abs(gen.smooth_noise(x, z)) <= 1.0 for x in range(-4, 4) for z in range(-4, 4))


def test_interpolated_noise_at_lattice_points_equals_smooth_noise():
    gen = HeightGenerator(seed=9)
    for x, z in [(0, 0), (3, 5), (-2, 7)]:
        assert gen.interpolated_noise(float(x), float(z)) == pytest.approx(gen.smooth_noise(x, z))


def test_generate_height_bounded_by_total_amplitude():
    gen = HeightGenerator(seed=31)
    limit = sum(ROUGHNESS**i * AMPLITUDE for i in range(gen.octaves))
    heights = [gen.generate_height(x, z) for x in range(0, 20) for z in range(0, 20)]
    assert all(abs(h) <= limit for h in heights)
    assert len(set(heights)) > 1


def test_generate_height_depends_on_seed():
    a = HeightGenerator(seed=1)
    b = HeightGenerator(seed=2)
    assert any(
        not math.isclose(a.generate_height(x, 0), b.generate_height(x, 0)) for x in range(10)
    )


def test_default_seed_within_range():
    gen = HeightGenerator()
    assert 0 <= gen.seed <= 1_000_000_000