[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "singruleset"
version = "0.1.0"
description = "Download AdGuard blocklists and IP lists and compile them into sing-box rule sets"
requires-python = ">=3.10"
dependencies = []
keywords = ["sing-box", "rule-set", "adguard", "blocklist", "ip-list", "srs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: Proxy Servers",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
singruleset = "singruleset.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["singruleset"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
