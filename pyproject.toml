[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jjmcp"
version = "1.0.0"
description = "Model Context Protocol server exposing Jujutsu (jj) version control commands as tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["jj", "jujutsu", "mcp", "model-context-protocol", "json-rpc", "version-control"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jj-mcp-server = "jjmcp.server:main"

[tool.hatch.build.targets.wheel]
packages = ["jjmcp"]

[tool.pytest.ini_options]
addopts = "-ra"
