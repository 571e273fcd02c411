#!/usr/bin/env python3
"""
Setup configuration for spot-sorter
Sort Spotify playlists and playlist folders alphabetically
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "spotipy>=2.22.1",
    "click>=8.1.7",
    "rich-click>=1.7.0",
    "rich>=13.0.0",
    "pyyaml>=6.0.1",
    "tqdm>=4.66.1",
    "python-dotenv>=1.0.0",
]

setup(
    name="spot-sorter",
    version="0.1.0",
    author="spot-sorter",
    description="Sort Spotify playlists and playlist folders alphabetically with a minimal number of moves",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["spot_sorter", "spot_sorter.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
        ],
    },
    entry_points={
        "console_scripts": [
            "spot-sort=spot_sorter.cli:main",
        ],
    },
    keywords="spotify playlist folder sort alphabetical cli",
)
