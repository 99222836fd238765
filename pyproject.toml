[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "podcaststore"
version = "0.1.0"
description = "Fetch podcast RSS feeds, store them in SQLite and serve them over a small JSON HTTP API"
requires-python = ">=3.10"
keywords = ["podcast", "rss", "sqlite", "flask", "api"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Multimedia :: Sound/Audio",
]
dependencies = [
    "flask",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
podcaststore = "podcaststore.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["podcaststore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
