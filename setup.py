#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from glob import glob
from os.path import basename
from os.path import splitext

from setuptools import find_packages
from setuptools import setup

setup(
    name="keycast",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="show your recent keystrokes as fading badges",
    long_description="A small always-on-top overlay that shows recent keystrokes, merging held keys and chorded modifiers.",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    py_modules=[splitext(basename(path))[0] for path in glob("src/*.py")],
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Multimedia :: Video :: Capture",
    ],
    keywords=["keystrokes", "screencast", "overlay"],
    python_requires=">=3.10",
    install_requires=[
        "attrs",
        "cattrs>=22.1.0",
        "msgspec>=0.18",
        "trio>=0.22.0",
        "trio-util>=0.7.0",
    ],
    extras_require={
        "test": ["pytest>=6.2.4", "pytest-trio>=0.8.0"],
    },
    entry_points={
        "console_scripts": [
            "keycast = keycast.app:main",
            "keycast-replay = keycast.scripts:replay_cli",
            "keycast-record = keycast.scripts:record_cli",
        ],
    },
)
