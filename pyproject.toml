[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kvstore-api"
version = "0.1.0"
description = "A small HTTP key-value store API backed by Tarantool"
requires-python = ">=3.10"
keywords = ["key-value", "http", "api", "tarantool", "wsgi"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "werkzeug",
    "msgpack",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
kvstore-api = "kvstore_api.app:main"

[tool.hatch.build.targets.wheel]
packages = ["kvstore_api"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
