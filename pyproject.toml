[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "echoagent"
version = "0.1.0"
description = "Tools, skills and a DAG task planner for LLM agents"
requires-python = ">=3.10"
dependencies = []
keywords = ["agent", "llm", "tools", "skills", "task-planning", "dag"]
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
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["echoagent"]

[tool.pytest.ini_options]
addopts = "-ra"
