[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cpframe"
version = "0.1.0"
description = "Game framework utilities: logging, diagnostics, hashing and encoding, compression, file I/O, AES encryption, serialization, math and input handling"
requires-python = ">=3.10"
keywords = ["game", "framework", "logging", "diagnostics", "compression", "serialization", "input"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "cryptography",
    "numpy",
    "pymongo",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cpframe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
