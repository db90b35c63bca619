[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plumbline"
version = "0.1.0"
description = "Building blocks for assessing a repository against the AI Codebase Maturity Model (ACMM)"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "acmm",
    "maturity-model",
    "ai-assisted-development",
    "code-quality",
    "ci",
    "json-schema",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
plumbline = "plumbline.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["plumbline"]

[tool.hatch.build.targets.sdist]
include = [
    "plumbline",
    "tests",
    "pyproject.toml",
    "README.md",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
