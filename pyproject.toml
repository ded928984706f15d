[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ghclone"
version = "0.1.0"
description = "Clone multiple repositories of a GitHub account at once, with optional filtering."
requires-python = ">=3.11"
keywords = ["github", "git", "clone", "repositories", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
    "Topic :: Utilities",
]
dependencies = [
    "requests",
    "tomli-w",
    "paramiko",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
ghclone = "ghclone.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ghclone"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
