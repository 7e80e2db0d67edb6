[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "denselinalg"
version = "0.1.0"
description = "Dense linear algebra on NumPy arrays: decompositions, least squares, Krylov orthogonalizers and LOBPCG eigensolvers"
requires-python = ">=3.10"
keywords = ["linear algebra", "eigenvalues", "least squares", "krylov", "arnoldi", "lobpcg", "qr", "svd"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["denselinalg"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
