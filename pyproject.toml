[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "layerlog"
version = "0.1.0"
description = "Logging building blocks: printf-style formatting, layouts, filters, nested diagnostic contexts, evaluators and appenders."
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "appender", "syslog", "smtp", "printf", "ndc", "filter"]
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
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["layerlog"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
