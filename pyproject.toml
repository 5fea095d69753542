[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "torusfhe"
version = "0.2.0"
description = "Torus fully homomorphic encryption primitives: TLWE, TRLWE, TRGSW, blind rotation, key switching and lookup tables"
requires-python = ">=3.10"
keywords = ["homomorphic", "tfhe", "cryptography", "privacy", "fhe", "lattice"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["torusfhe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
