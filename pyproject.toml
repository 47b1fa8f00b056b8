[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tsconvert"
version = "4.5.0"
description = "Convert Qt Linguist .ts translation files to CSV or XLSX spreadsheets and back."
requires-python = ">=3.10"
dependencies = []
keywords = ["qt", "linguist", "ts", "translation", "csv", "xlsx", "localization"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Localization",
    "Topic :: Software Development :: Internationalization",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tsconvert = "tsconvert.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tsconvert"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
