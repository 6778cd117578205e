#!/usr/bin/env python
"""
setup.py file for installing the VP detection package.

Heavily borrowed from Kenneth Reitz -
https://github.com/kennethreitz/setup.py
"""

import io
import os

from setuptools import find_packages, setup

# Package meta-data.
NAME = 'naive_vp_detect'
DESCRIPTION = 'Naive vanishing point estimation by averaging line intersections'
EMAIL = 'rphan@ryerson.ca'
AUTHOR = 'Ray Phan'
REQUIRES_PYTHON = '>=3.8.0'
VERSION = None

# Required packages
REQUIRED = ['numpy', 'opencv-contrib-python']

# Optional packages
EXTRAS = {
    'tests': ['pytest'],
}

here = os.path.abspath(os.path.dirname(__file__))

# Import the README and use it as the long-description.
try:
    with io.open(os.path.join(here, 'README.md'), encoding='utf-8') as f:
        long_description = '\n' + f.read()
except FileNotFoundError:
    long_description = DESCRIPTION

# Load the package's __version__.py module as a dictionary.
about = {}
if not VERSION:
    project_slug = NAME.lower().replace("-", "_").replace(" ", "_")
    with open(os.path.join(here, project_slug, '__version__.py')) as f:
        exec(f.read(), about)
else:
    about['__version__'] = VERSION

# Where the magic happens:
setup(
    name=NAME,
    version=about['__version__'],
    description=DESCRIPTION,
    long_description=long_description,
    long_description_content_type='text/markdown',
    author=AUTHOR,
    author_email=EMAIL,
    python_requires=REQUIRES_PYTHON,
    packages=find_packages(
        exclude=["tests", "*.tests", "*.tests.*", "tests.*"]),
    entry_points={
        'console_scripts': ['run_vp_detect=naive_vp_detect.run_vp_detect:main'],
    },
    install_requires=REQUIRED,
    extras_require=EXTRAS,
    include_package_data=True,
    license='MIT',
    classifiers=[
        # Trove classifiers
        # Full list: https://pypi.python.org/pypi?%3Aaction=list_classifiers
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: Implementation :: CPython',
        'Programming Language :: Python :: Implementation :: PyPy'
    ],
)
