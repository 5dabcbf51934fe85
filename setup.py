"""
Setup script for even_spaced_curves package.
"""

from setuptools import setup, find_packages

setup(
    name="even_spaced_curves",
    version="0.1.0",
    description="Evenly spaced streamline placement over noise-derived vector fields",
    author="Andrey",
    packages=find_packages(include=["even_spaced_curves", "even_spaced_curves.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20",
        "numba>=0.56",
        "matplotlib>=3.5",
        "scipy>=1.7",
        "opensimplex>=0.4",
    ],
    extras_require={
        "dev": ["pytest>=7.0", "black", "flake8"],
    },
)
