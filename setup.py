#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os
import re

from setuptools import setup


def get_version(package):
    """
    Return package version as listed in `__version__` in `init.py`.
    """
    init_py = open(os.path.join(package, "__init__.py")).read()
    return re.search("__version__ = ['\"]([^'\"]+)['\"]", init_py).group(1)


def get_long_description():
    """
    Return the README.
    """
    return open("README.md", "r", encoding="utf8").read()


def get_packages(package):
    """
    Return root package and all sub-packages.
    """
    return [
        dirpath
        for dirpath, dirnames, filenames in os.walk(package)
        if os.path.exists(os.path.join(dirpath, "__init__.py"))
    ]


setup(
    name="memory-demo",
    version=get_version("memory_demo"),
    license="BSD",
    description="Retained references versus scoped release, measured",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    package_data={"memory_demo": ["py.typed"]},
    packages=get_packages("memory_demo"),
    python_requires=">=3.8",
    install_requires=["psutil"],
    extras_require={"tests": ["pytest"]},
    entry_points={"console_scripts": ["memory-demo=memory_demo.cli:main"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
    ],
)
