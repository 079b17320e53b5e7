[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "g3device"
version = "0.1.0"
description = "Device support utilities for an MSM8974 handset: location-service helpers, target detection, timers and LED control"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "gps",
    "location",
    "message-queue",
    "timer",
    "leds",
    "msm8974",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["g3device"]

[tool.hatch.build.targets.sdist]
include = ["g3device", "tests"]

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
