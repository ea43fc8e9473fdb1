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

from setuptools import find_packages, setup

from flatcodec import __version__

setup(
    name='flatcodec',
    version=__version__,
    description='Flat binary and readable-text codecs for primitive values, strings, lists and framed objects',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache-2.0',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.11',
    packages=find_packages(exclude=('flatcodec_tests', 'flatcodec_tests.*')),
    package_data={'flatcodec.conf': ['*.yml']},
    install_requires=[
        'structlog>=22.3',
        'pydantic>=2,<3',
        'PyYAML>=6',
        'typing_extensions>=4.10',
    ],
    extras_require={
        'test': ['pytest>=7'],
    },
)
