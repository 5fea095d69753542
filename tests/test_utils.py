import numpy as np
import pytest

from torusfhe import utils


def test_gaussian_vec_lengths():
    rng = np.random.default_rng(1)
    assert len(utils.gaussian_f64_vec([0.25], 0.1, rng)) == 1
    assert len(utils.gaussian_f64_vec([0.25, 0.5], 0.1, rng)) == 2


@pytest.mark.parametrize(
    "value, torus",
    [
        (0.0, 0),
        (0.125, 0x20000000),
        (-0.125, 0xE0000000),
        (0.5, 0x80000000),
        (1.25, 0x40000000),
        (-0.25, 0xC0000000),
        (float("nan"), 0),
    ],
)
def test_f64_to_torus(value, torus):
    assert utils.f64_to_torus(value) == torus


def test_torus_to_f64():
    assert utils.torus_to_f64(0x80000000) == 0.5
    assert utils.torus_to_f64(0x20000000) == 0.125
    assert utils.torus_to_f64(0) == 0.0


@pytest.mark.parametrize("value", [0.0, 0.125, 0.375, 0.5, 0.875])
def test_round_trip(value):
    assert utils.torus_to_f64(utils.f64_to_torus(value)) == value


def test_vec_matches_scalar():
    values = [0.125, -0.125, 0.7, -3.3, 2.0, 0.999]
    vec = utils.f64_to_torus_vec(values)
    assert vec.dtype == np.uint32
    assert vec.tolist() == [utils.f64_to_torus(v) for v in values]


def test_zero_noise_keeps_mean():
    assert utils.gaussian_torus(12, 0.0) == 12
    assert utils.gaussian_f64(0.125, 0.0) == 0x20000000
    assert utils.gaussian_f64_vec([0.125, -0.125], 0.0).tolist() == [
        0x20000000,
        0xE0000000,
    ]


def test_wraps_around_torus():
    assert utils.gaussian_torus(0xFFFFFFFF + 2, 0.0) == 1


def test_small_noise_stays_close():
    rng = np.random.default_rng(7)
    out = utils.gaussian_f64_vec([0.25] * 200, 1e-6, rng).astype(np.int64)
    assert np.all(np.abs(out - 0x40000000) < 1 << 16)


def test_seeded_rng_is_reproducible():
    a = utils.gaussian_f64(0.3, 0.01, np.random.default_rng(5))
    b = utils.gaussian_f64(0.3, 0.01, np.random.default_rng(5))
    assert a == b


def test_negative_alpha_rejected():
    with pytest.raises(ValueError):
        utils.gaussian_torus(0, -1.0)
    with pytest.raises(ValueError):
        utils.gaussian_f64_vec([0.0], float("nan"))