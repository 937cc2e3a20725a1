[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "settings-pages"
version = "0.1.0"
description = "Back-end helpers for desktop settings pages: system information, date and time, and wallpaper thumbnails"
requires-python = ">=3.10"
keywords = ["settings", "desktop", "system-info", "timezone", "wallpaper", "thumbnails"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
]
dependencies = [
    "psutil",
    "pillow",
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["settings_pages"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
