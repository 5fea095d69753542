import pytest

from torusfhe.lut.encoder import Encoder


def test_binary_encoder():
    encoder = Encoder(2)
    encoded_0 = encoder.encode(0)
    encoded_1 = encoder.encode(1)
    assert encoder.decode(encoded_0) == 0
    assert encoder.decode(encoded_1) == 1
    assert not encoder.decode_bool(encoded_0)
    assert encoder.decode_bool(encoded_1)


def test_4bit_encoder():
    encoder = Encoder(4)
    for i in range(4):
        assert encoder.decode(encoder.encode(i)) == i


def test_custom_scale():
    encoder = Encoder.with_scale(2, 0.5)
    assert encoder.decode(encoder.encode(0)) == 0
    assert encoder.decode(encoder.encode(1)) == 1


def test_default_scale():
    assert Encoder(2).scale == 0.25
    assert Encoder(4).scale == 0.125


def test_encoded_values():
    encoder = Encoder(2)
    assert encoder.encode(0) == 0
    assert encoder.encode(1) == 1 << 30
    assert encoder.encode(3) == 1 << 30


def test_encode_with_scale():
    encoder = Encoder(2)
    assert encoder.encode_with_scale(1, 0.5) == 1 << 31
    assert encoder.encode_with_scale(2, 0.5) == 0


def test_decode_rounds_to_nearest():
    encoder = Encoder(4)
    step = 1 << 29
    assert encoder.decode(2 * step + step // 4) == 2
    assert encoder.decode(3 * step - step // 4) == 3


def test_invalid_modulus():
    with pytest.raises(ValueError):
        Encoder(0)