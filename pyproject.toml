[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "starkit"
version = "0.1.0"
description = "Small building blocks: a handler-based logger, a millisecond timer queue, socket read/write helpers and a select-based server with an interactive client."
requires-python = ">=3.10"
dependencies = []
keywords = ["logging", "timer", "select", "socket", "server", "client"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
starkit-timer-demo = "starkit.timer:main"
starkit-client = "starkit.client:main"

[tool.hatch.build.targets.wheel]
packages = ["starkit"]

[tool.pytest.ini_options]
addopts = "-ra"
