[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "exdrill"
version = "5.2.1"
description = "Compile, run and check small Rust exercises, with a watch mode and progress tracking"
requires-python = ">=3.11"
keywords = ["exercises", "learning", "rust", "training", "education"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education :: Computer Aided Instruction (CAI)",
]
dependencies = [
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
exdrill = "exdrill.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["exdrill"]

[tool.pytest.ini_options]
addopts = "-ra"
