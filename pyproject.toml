[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "filekit"
version = "0.1.0"
description = "Everyday file helpers: reading, writing, compression, encryption, line scanning, watching and downloading"
requires-python = ">=3.10"
keywords = ["files", "io", "compression", "download", "gzip", "lz4", "msgpack", "watch", "csv", "zip"]
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
    "Topic :: Utilities",
    "Topic :: System :: Filesystems",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Internet :: WWW/HTTP",
]
dependencies = [
    "msgpack",
    "lz4",
    "cryptography",
    "requests",
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["filekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
