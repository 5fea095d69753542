from torusfhe.lut.lookup_table import LookupTable
from torusfhe.trlwe import TRLWELv1


def test_lookup_table_creation():
    assert LookupTable().is_empty()


def test_lookup_table_from_poly():
    poly = TRLWELv1()
    poly.b[0] = 1
    lut = LookupTable.from_poly(poly)
    assert not lut.is_empty()


def test_lookup_table_copy():
    lut1 = LookupTable()
    lut2 = LookupTable()
    lut1.poly.b[0] = 42
    lut1.poly.b[1] = 24
    lut2.copy_from(lut1)
    assert int(lut2.poly.b[0]) == 42
    assert int(lut2.poly.b[1]) == 24


def test_lookup_table_copy_is_independent():
    lut1 = LookupTable()
    lut2 = LookupTable()
    lut1.poly.a[3] = 9
    lut2.copy_from(lut1)
    lut1.poly.a[3] = 0
    assert int(lut2.poly.a[3]) == 9


def test_lookup_table_clear():
    lut = LookupTable()
    lut.poly.b[0] = 42
    lut.poly.b[1] = 24
    assert not lut.is_empty()
    lut.clear()
    assert lut.is_empty()


def test_lookup_table_conversions():
    poly = TRLWELv1()
    poly.b[0] = 123
    lut = LookupTable.from_poly(poly)
    assert int(lut.poly.b[0]) == 123
    poly_back = lut.poly
    assert int(poly_back.b[0]) == 123


def test_is_empty_checks_mask_too():
    lut = LookupTable()
    lut.poly.a[5] = 1
    assert not lut.is_empty()


def test_default_tables_are_equal():
    assert LookupTable() == LookupTable()
    other = LookupTable()
    other.poly.b[0] = 1
    assert not LookupTable() == other