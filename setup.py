"""
Setup script for zmod.

To install:
    pip install .

To install in development mode:
    pip install -e ".[dev]"

To build wheel:
    pip wheel . --no-deps
"""

from setuptools import setup, find_packages

setup(
    name="zmod",
    version="0.3.0",
    description="Exact modular arithmetic over Z_N and Z_N[i] with CRT",
    packages=find_packages(include=["zmod", "zmod.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
        "pyyaml>=5.4",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-benchmark",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    keywords="modular-arithmetic residue gaussian-integers crt number-theory",
)
