[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "workbook"
version = "0.1.0"
description = "Small worked programs: expression evaluation, HTML link crawling, bit sets, concurrent pipelines, memoisation and toy network servers."
requires-python = ">=3.10"
keywords = [
    "examples",
    "expression-evaluator",
    "crawler",
    "html",
    "concurrency",
    "memoization",
    "bitset",
    "toposort",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "html5lib",
    "requests",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
workbook-surface = "workbook.surface:main"
workbook-findlinks = "workbook.htmltree:findlinks_main"
workbook-outline = "workbook.htmltree:outline_main"
workbook-findlinks-url = "workbook.links:findlinks_main"
workbook-fetch = "workbook.links:fetch_main"
workbook-title = "workbook.title:main"
workbook-crawl = "workbook.crawl:main"
workbook-wait = "workbook.wait:main"
workbook-toposort = "workbook.toposort:main"
workbook-xmlselect = "workbook.xmlselect:main"
workbook-sorting = "workbook.sorting:main"
workbook-tempflag = "workbook.tempconv:main"
workbook-shop = "workbook.shop:main"
workbook-thumbnail = "workbook.thumbnail:main"
workbook-du = "workbook.du:main"
workbook-pipeline = "workbook.pipeline:main"
workbook-countdown = "workbook.countdown:main"
workbook-chat = "workbook.chat:main"
workbook-clock = "workbook.tcpdemos:clock_main"
workbook-reverb = "workbook.tcpdemos:reverb_main"
workbook-netcat = "workbook.tcpdemos:netcat_main"

[tool.hatch.build.targets.wheel]
packages = ["workbook"]

[tool.hatch.build.targets.sdist]
include = ["workbook", "tests"]

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
ignore_missing_imports = true
