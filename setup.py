#!/usr/bin/env python3
"""
Setup script for roachcli package.
"""

from setuptools import setup, find_packages

setup(
    name="roachcli",
    version="0.1.0",
    description="Cockroach command-line interface with shared flag binding",
    author="roachcli Team",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "typer>=0.16,<0.20",
        "click>=8.1",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "cockroach=roachcli.cli.main:main",
        ],
    },
)
