[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "framefilters"
version = "0.1.0"
description = "Live camera viewer with switchable image filters: grayscale, Gaussian blur, edge detection and sepia"
requires-python = ">=3.10"
keywords = ["camera", "video", "image filters", "grayscale", "blur", "canny", "sepia"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Display",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "scipy",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
framefilters = "framefilters.processor:main"

[tool.hatch.build.targets.wheel]
packages = ["framefilters"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
