[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockheat"
version = "0.1.0"
description = "A block-breaking arcade game with spinning bonus blocks, ball gravity and a stage editor"
requires-python = ">=3.10"
keywords = ["game", "arcade", "breakout", "blocks", "pygame", "level-editor"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
blockheat = "blockheat.game:main"
blockheat-edit = "blockheat.editor:main"

[tool.hatch.build.targets.wheel]
packages = ["blockheat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
