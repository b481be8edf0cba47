[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "suiarb"
version = "0.1.0"
description = "Asyncio building blocks for Sui arbitrage bots: Shio auction feed and bids, simulation interfaces and chain utilities"
requires-python = ">=3.10"
keywords = ["sui", "mev", "arbitrage", "shio", "auction", "blockchain", "asyncio"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Office/Business :: Financial :: Investment",
]
dependencies = [
    "websockets",
    "httpx",
    "pynacl",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["suiarb"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
