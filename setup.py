# setup.py
"""Setup script for the Image Analyzer."""

import os

from setuptools import setup, find_packages

setup(
    name="image-analyzer",
    version="1.0.0",
    description="Concurrent image sorter: valid, invalid and duplicate images into mirrored folders",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Image Analyzer Team",
    packages=find_packages(include=["image_analyzer", "image_analyzer.*"]),
    python_requires=">=3.8",
    install_requires=[
        "Pillow>=9.1.0",
        "tqdm>=4.50.0",
    ],
    extras_require={
        "test": [
            "pytest>=6.0.0",
            "pytest-cov>=2.10.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "image-analyzer=image_analyzer.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Multimedia :: Graphics",
        "Topic :: System :: Filesystems",
    ],
)
