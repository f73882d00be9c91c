#!/usr/bin/env python3

import pathlib

from setuptools import find_packages, setup

HERE = pathlib.Path(__file__).parent

try:
    README = (HERE / "README.md").read_text()
except FileNotFoundError:
    README = "State-checked libmagic sessions with typed errors"

setup(
    name="magiccookie",
    version="1.0.0",
    description="State-checked libmagic sessions with typed errors",
    long_description=README,
    long_description_content_type="text/markdown",
    author="Marc Rivero",
    author_email="mriverolopez@gmail.com",
    url="https://github.com/seifreed/magiccookie",
    packages=find_packages(include=["magiccookie", "magiccookie.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.13",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: System :: Filesystems",
    ],
    python_requires=">=3.10",
    install_requires=[
        "python-magic>=0.4.27",
        "rich>=13.7.0",
        "click>=8.1.7",
        "pyfiglet>=0.8.post1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "magiccookie=magiccookie.cli_main:cli",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
