[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "probekit"
version = "1.3.6"
description = "HTTP probing toolkit: request sending, response fingerprinting, title and CSP extraction, TLS details and input parsing"
requires-python = ">=3.10"
keywords = [
    "http",
    "probe",
    "recon",
    "fingerprint",
    "favicon",
    "tls",
    "virtual-host",
    "http2",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Security",
    "Topic :: System :: Networking :: Monitoring",
]
dependencies = [
    "requests",
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
probekit-functional = "probekit.functional:main"

[tool.hatch.build.targets.wheel]
packages = ["probekit"]

[tool.hatch.build.targets.sdist]
include = ["probekit", "tests", "pyproject.toml"]

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
ignore_missing_imports = true
