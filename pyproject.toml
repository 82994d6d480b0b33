[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "leafstage"
version = "0.1.0"
description = "A small side-scrolling arcade game: falling leaves, a split-screen stage, menus, a two-player duel and a minimap demo."
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "pygame", "side-scroller", "arcade", "split-screen", "minimap"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
leafstage-split = "leafstage.splitscreen:main"
leafstage-menu = "leafstage.menu_app:main"
leafstage-duel = "leafstage.duel:main"
leafstage-minimap = "leafstage.minimap:main"

[tool.hatch.build.targets.wheel]
packages = ["leafstage"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
