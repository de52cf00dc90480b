[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskboard"
version = "0.1.0"
description = "Small JSON web services for tasks and articles, built on WSGI, with in-memory and SQL storage."
requires-python = ">=3.10"
keywords = ["tasks", "articles", "wsgi", "rest", "json", "werkzeug", "sqlalchemy"]
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
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]
dependencies = [
    "werkzeug>=3.0",
    "pyyaml>=6.0",
    "sqlalchemy>=2.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[project.scripts]
taskboard-server = "taskboard.server:main"
taskboard-articles = "taskboard.article_api:main"

[tool.hatch.build.targets.wheel]
packages = ["taskboard"]

[tool.hatch.build.targets.sdist]
include = ["taskboard", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
