#!/usr/bin/env python3

from setuptools import setup, find_packages

setup(
    name="fetchzip",
    version="1.0.0",
    description="Download zip archives, unpack them safely and search the result",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'fetchzip=fetchzip.cli:main',
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: System :: Archiving :: Compression",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
