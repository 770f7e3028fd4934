#! /usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages


def readme():
    with open("README.md", encoding="utf8") as f:
        return f.read()


setup(
    name="pyfli",
    version="0.1.0",
    description="Python interface to Finger Lakes Instrumentation cameras, filter wheels and focusers",
    long_description=readme(),
    long_description_content_type="text/markdown",
    license="CeCILL-B",
    packages=find_packages(),
    install_requires=["numpy", "h5py", "fluiddyn >= 0.3.2", "progressbar2"],
    extras_require={"test": ["pytest"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
