[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vllmchill"
version = "0.1.0"
description = "Model resource types, configuration, request handlers and command line for a scale-to-zero vLLM autoscaler on Kubernetes"
requires-python = ">=3.10"
dependencies = []
keywords = ["vllm", "kubernetes", "autoscaler", "scale-to-zero", "crd", "llm"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vllm-chill = "vllmchill.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["vllmchill"]

[tool.pytest.ini_options]
addopts = "-ra"
