[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nstdkit"
version = "0.1.0"
description = "Small toolkit: SHA-256 and HMAC, pooled ordered maps, string helpers, synchronization primitives, signal/slot callbacks, futures, directory access and an interactive line prompt."
requires-python = ">=3.10"
dependencies = []
keywords = ["sha256", "hmac", "signals", "slots", "future", "semaphore", "directory", "line editor", "prompt"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nstdkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
