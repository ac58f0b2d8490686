#!/usr/bin/env python3
"""
Setup script for snapmatch
Minimal installation with smart defaults
"""

from pathlib import Path
from setuptools import setup, find_packages

# Read version from package
version = "0.1.0"

# Minimal dependencies - just what we absolutely need
install_requires = [
    "pyjson5>=1.6.9",
    "fastjsonschema>=2.20",
    "portalocker>=2.8",
]

# Optional dependencies for enhanced features
extras_require = {
    "test": [
        "pytest>=7.0.0",
    ],
    "dev": [
        "pytest>=7.0.0",
        "black>=22.0.0",
        "mypy>=0.950",
    ],
}

setup(
    name="snapmatch",
    version=version,
    description="Normalize captured program output to expected patterns with wildcards",
    long_description=open("README.md").read() if Path("README.md").exists() else "",
    long_description_content_type="text/markdown",
    python_requires=">=3.8",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "snapmatch=snapmatch.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Testing",
    ],
)
