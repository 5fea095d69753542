# torusfhe

Building blocks for TFHE (fully homomorphic encryption over the 32-bit torus),
written on top of NumPy.

## Modules

- `torusfhe.params`: parameter sets (`TlweParams`, `TrlweParams`,
  `TrgswParams`, `SecurityParams`), the presets `SECURITY_80_BIT`,
  `SECURITY_110_BIT`, `SECURITY_128_BIT` and `SECURITY_UINT1` to
  `SECURITY_UINT8`, `DEFAULT_SECURITY` (the 128-bit set) and
  `security_info`, which describes a set in one line.
- `torusfhe.utils`: conversion between floats and torus values
  (`f64_to_torus`, `torus_to_f64`, `f64_to_torus_vec`) and Gaussian noise
  sampling (`gaussian_torus`, `gaussian_f64`, `gaussian_f64_vec`).
- `torusfhe.tlwe`: scalar LWE ciphertexts `TLWELv0` and `TLWELv1` with
  `encrypt_f64`, `encrypt_bool` and `decrypt_bool`. `TLWELv0` also offers
  `encrypt_lwe_message` / `decrypt_lwe_message` for integer messages and the
  homomorphic operations `+`, `-`, unary `-`, `*`, `add_mul` and `sub_mul`.
- `torusfhe.trlwe`: ring ciphertexts `TRLWELv1`, their frequency-domain form
  `TRLWELv1FFT`, `negacyclic_mul` (exact polynomial product modulo
  `X^N + 1` and `2^32`) and `sample_extract_index` /
  `sample_extract_index_2`.
- `torusfhe.trgsw`: ring-GSW ciphertexts `TRGSWLv1` and `TRGSWLv1FFT`,
  gadget `decomposition`, `external_product_with_fft`, `cmux`,
  `poly_mul_with_x_k`, `blind_rotate`, `batch_blind_rotate` and
  `identity_key_switching`. `DECOMPOSITION_OFFSET` is the default offset
  the decomposition uses.
- `torusfhe.parallel`: `ParallelConfig`, the `Railgun` interface, its
  thread-pool implementation `ThreadPoolRailgun`, `default_railgun` and
  `thread_railgun`. `batch_blind_rotate` uses these to run blind rotations
  side by side.
- `torusfhe.lut.encoder`, `torusfhe.lut.lookup_table`,
  `torusfhe.lut.generator`: `Encoder`, `LookupTable` and `Generator` for
  building lookup tables (test vectors) for programmable bootstrapping.

## Installation

    pip install torusfhe

To install the test tools as well:

    pip install "torusfhe[test]"

## Examples

A secret key is a sequence of 0/1 integers, one per coefficient.

```python
import numpy as np

from torusfhe import params
from torusfhe.tlwe import TLWELv0

p = params.DEFAULT_SECURITY
rng = np.random.default_rng()
key_lv0 = rng.integers(0, 2, size=p.tlwe_lv0.n, dtype=np.uint32)

a = TLWELv0.encrypt_bool(True, p.tlwe_lv0.alpha, key_lv0)
b = TLWELv0.encrypt_bool(False, p.tlwe_lv0.alpha, key_lv0)

assert a.decrypt_bool(key_lv0) is True
assert (-b).decrypt_bool(key_lv0) is True
```

Encrypt a vector of bits as one ring ciphertext and pull out a single
coefficient as an LWE sample:

```python
from torusfhe.trlwe import TRLWELv1, sample_extract_index

key_lv1 = rng.integers(0, 2, size=p.trlwe_lv1.n, dtype=np.uint32)
bits = rng.integers(0, 2, size=p.trlwe_lv1.n).astype(bool)

c = TRLWELv1.encrypt_bool(bits, p.trlwe_lv1.alpha, key_lv1)
assert c.decrypt_bool(key_lv1) == bits.tolist()
assert sample_extract_index(c, 3).decrypt_bool(key_lv1) == bool(bits[3])
```

Build a lookup table for a function on two-bit messages:

```python
from torusfhe.lut.generator import Generator

gen = Generator(4)
lut = gen.generate_lookup_table(lambda x: (x + 1) % 4)
assert not lut.is_empty()
```

## What this package does not do

- It has no key generation beyond plain arrays: there is no secret-key or
  cloud-key type, and nothing that builds a bootstrapping key (the sequence
  of `TRGSWLv1FFT` that `blind_rotate` takes) or a key switching key (the
  samples `identity_key_switching` takes). Callers build these from the
  primitives above.
- It has no homomorphic gate layer (AND, OR, NAND, MUX and so on) and no
  complete bootstrapping routine; `blind_rotate`, `sample_extract_index` and
  `identity_key_switching` are the steps such a routine is made of.
- It has no command-line program and stores nothing on disk.

## Running the tests

    pytest