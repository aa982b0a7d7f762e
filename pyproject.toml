[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dominionsim"
version = "0.1.0"
description = "A Dominion card game engine with a seeded multi-stream random generator, a scripted two-player game and an interactive console."
requires-python = ">=3.10"
dependencies = []
keywords = ["dominion", "card game", "deck building", "simulation", "board game"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dominion-player = "dominionsim.player:main"
dominion-playdom = "dominionsim.playdom:main"
dominion-findvalue = "dominionsim.rngs:main"

[tool.hatch.build.targets.wheel]
packages = ["dominionsim"]

[tool.pytest.ini_options]
addopts = "-ra"
