#!/usr/bin/env python3
"""Setup script for galeria-tools package."""

from setuptools import setup, find_packages

setup(
    name="galeria-tools",
    version="0.1.0",
    description="Private client gallery pages for a photography website",
    author="Galeria Project",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "galeria": ["templates/*", "templates/**/*"],
    },
    include_package_data=True,
    install_requires=[
        "click>=8.0.0",
        "Pillow>=10.0.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0"],
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "galeria=galeria.cli:main",
        ],
    },
    python_requires=">=3.10",
)
