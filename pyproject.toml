[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ripesearch"
version = "0.1.0"
description = "A small full-text search engine for RSS corpora: TF-IDF inverted index, near-duplicate filtering, word suggestions and an LRU article cache backed by Redis."
requires-python = ">=3.10"
keywords = [
    "search",
    "inverted-index",
    "tf-idf",
    "rss",
    "redis",
    "lru-cache",
    "edit-distance",
    "segmentation",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Natural Language :: Chinese (Simplified)",
    "Natural Language :: English",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
    "Topic :: Text Processing :: Indexing",
]
dependencies = [
    "redis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ripesearch-recommend = "ripesearch.recommend:main"

[tool.hatch.build.targets.wheel]
packages = ["ripesearch"]

[tool.hatch.build.targets.sdist]
include = [
    "ripesearch",
    "tests",
    "README.md",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
