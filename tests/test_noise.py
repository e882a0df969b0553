"""Tests for the coherent noise source."""
import numpy as np
import pytest

from flowfield.noise import PerlinNoise


def test_same_seed_reproduces_samples():
    xs = np.linspace(0.0, 7.3, 50)
    a = PerlinNoise(seed=7).sample(xs, xs * 0.5, 0.25, octaves=4, falloff=0.65)
    b = PerlinNoise(seed=7).sample(xs, xs * 0.5, 0.25, octaves=4, falloff=0.65)
    np.testing.assert_allclose(a, b)


def test_different_seeds_differ():
    xs = np.linspace(0.0, 7.3, 50)
    a = PerlinNoise(seed=1).sample(xs, xs, 0.0)
    b = PerlinNoise(seed=2).sample(xs, xs, 0.0)
    assert not np.allclose(a, b)


def test_samples_lie_in_unit_interval():
    noise = PerlinNoise(seed=3)
    xs, ys = np.meshgrid(np.linspace(0, 20, 60), np.linspace(0, 20, 60))
    for falloff in (0.0, 0.5, 0.65, 1.0):
        values = noise.sample(xs, ys, 1.5, octaves=8, falloff=falloff)
        assert values.shape == xs.shape
        assert values.min() >= 0.0
        assert values.max() < 1.0


def test_lattice_point_returns_table_value():
    noise = PerlinNoise(seed=11)
    assert noise(0.0, 0.0, 0.0, octaves=1) == pytest.approx(noise.table[0])


def test_zero_falloff_matches_single_octave():
    noise = PerlinNoise(seed=5)
    xs = np.linspace(0.1, 3.9, 25)
    single = noise.sample(xs, 1.3, 0.2, octaves=1)
    many = noise.sample(xs, 1.3, 0.2, octaves=6, falloff=0.0)
    np.testing.assert_allclose(single, many)


def test_noise_is_continuous():
    noise = PerlinNoise(seed=9)
    assert noise(2.4, 1.1, 0.3) == pytest.approx(noise(2.4 + 1e-7, 1.1, 0.3), abs=1e-5)


def test_negative_coordinates_are_mirrored():
    noise = PerlinNoise(seed=4)
    assert noise(-1.7, -0.4, 0.0) == pytest.approx(noise(1.7, 0.4, 0.0))


def test_scalar_call_returns_float():
    assert isinstance(PerlinNoise(seed=0)(0.3, 0.6, 0.9), float)


def test_zero_octaves_rejected():
    with pytest.raises(ValueError):
        PerlinNoise(seed=0).sample(0.5, 0.5, 0.0, octaves=0)
