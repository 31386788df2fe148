[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clarus"
version = "0.1.0"
description = "In-memory multi-asset token ledger, root-call mandate, call weight tables and a block and extrinsic inspector"
requires-python = ">=3.10"
dependencies = []
keywords = ["token", "ledger", "erc20", "allowance", "blockchain", "runtime", "inspector"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["clarus"]

[tool.pytest.ini_options]
addopts = "-ra"
