[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "samlib"
version = "1.0.0"
description = "Small system utilities: string formatting, MD5/SHA-256, TEA, glob matching, file walking, process and network helpers, threads and a page cache."
requires-python = ">=3.10"
keywords = ["utilities", "md5", "sha256", "tea", "fnmatch", "walkfiles", "strfmt", "mpool", "xoroshiro"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Utilities",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["samlib"]

[tool.pytest.ini_options]
addopts = "-ra"
