[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sharpgs"
version = "0.1.0"
description = "SharpGS range proofs over Pedersen multi-commitments, using three-squares decompositions"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "zero-knowledge",
    "range proof",
    "pedersen commitment",
    "sigma protocol",
    "three squares",
    "bn254",
    "cryptography",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sharpgs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
