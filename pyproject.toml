[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "soralog"
version = "0.1.0"
description = "Hierarchical logging with groups, sinks and YAML configuration"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["logging", "logger", "sink", "yaml", "configuration"]
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
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
soralog-example = "soralog.example:main"

[tool.hatch.build.targets.wheel]
packages = ["soralog"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
