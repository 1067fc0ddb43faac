#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import os
import re

from setuptools import find_packages, setup


def _read_version() -> str:
    # the package can't be imported before its dependencies are installed
    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'fixedwire', 'version.py')
    with open(path, 'r') as fp:
        match = re.search(r"^BASE_VERSION = '([^']+)'", fp.read(), re.MULTILINE)
    assert match is not None, 'BASE_VERSION not found'
    return match.group(1)


setup(
    name='fixedwire',
    version=_read_version(),
    description='Fixed layout binary serialization driven by type annotations',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache License 2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.11',
    packages=find_packages(exclude=('fixedwire_tests', 'fixedwire_tests.*')),
    install_requires=[
        'structlog>=22.3.0',
        'pydantic>=2.0,<3',
        'PyYAML>=6.0',
        'typing_extensions>=4.8.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.2.0',
            'hypothesis>=6.0',
        ],
    },
)
