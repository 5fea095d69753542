import pytest

from torusfhe import params
from torusfhe.lut.generator import Generator, _div_round

QUARTER = 1 << 30
TORUS = 1 << 32


def test_generator_creation():
    generator = Generator(2)
    assert generator.message_modulus == 2
    assert generator.poly_degree == params.trgsw_lv1.n
    assert generator.lookup_table_size == params.trgsw_lv1.n


def test_identity_function():
    lut = Generator(2).generate_lookup_table(lambda x: x)
    assert not lut.is_empty()


def test_not_function():
    lut = Generator(2).generate_lookup_table(lambda x: 1 - x)
    assert not lut.is_empty()


def test_constant_function():
    lut = Generator(2).generate_lookup_table(lambda _x: 1)
    assert not lut.is_empty()


def test_4bit_function():
    lut = Generator(4).generate_lookup_table(lambda x: (x + 1) % 4)
    assert not lut.is_empty()


def test_custom_scale():
    lut = Generator.with_scale(2, 0.5).generate_lookup_table(lambda x: x)
    assert not lut.is_empty()


def test_mod_switch_in_range():
    generator = Generator(2)
    for value in (0, (TORUS - 1) // 2, TORUS - 1):
        assert generator.mod_switch(value) < generator.lookup_table_size


def test_mod_switch_values():
    generator = Generator(2)
    assert generator.mod_switch(0) == 0
    assert generator.mod_switch(TORUS - 1) == 0
    assert generator.mod_switch((TORUS - 1) // 2) == 512


@pytest.mark.parametrize(
    "a, b, expected",
    [(5, 2, 3), (4, 2, 2), (3, 2, 2), (1, 2, 1), (0, 2, 0)],
)
def test_div_round(a, b, expected):
    assert _div_round(a, b) == expected


def test_identity_table_layout():
    lut = Generator(2).generate_lookup_table(lambda x: x)
    b = lut.poly.b
    assert int(b[0]) == 0
    assert int(b[255]) == 0
    assert int(b[256]) == QUARTER
    assert int(b[767]) == QUARTER
    assert int(b[768]) == 0
    assert int(b[1023]) == 0
    assert not lut.poly.a.any()


def test_constant_table_negates_tail():
    lut = Generator(2).generate_lookup_table(lambda _x: 1)
    b = lut.poly.b
    assert int(b[0]) == QUARTER
    assert int(b[767]) == QUARTER
    assert int(b[768]) == TORUS - QUARTER
    assert int(b[1023]) == TORUS - QUARTER


def test_full_table_uses_raw_values():
    lut = Generator(2).generate_lookup_table_full(lambda _x: 5)
    assert int(lut.poly.b[0]) == 5
    assert int(lut.poly.b[767]) == 5
    assert int(lut.poly.b[1023]) == TORUS - 5


def test_custom_table_matches_dedicated_generator():
    custom = Generator(2).generate_lookup_table_custom(lambda x: x, 4, 1.0 / 8.0)
    direct = Generator(4).generate_lookup_table(lambda x: x)
    assert custom.poly == direct.poly


def test_custom_table_leaves_generator_unchanged():
    generator = Generator(2)
    generator.generate_lookup_table_custom(lambda x: x, 8, 0.01)
    assert generator.message_modulus == 2
    assert generator.encoder.scale == pytest.approx(0.25)


def test_invalid_modulus_rejected():
    with pytest.raises(ValueError):
        Generator(0)