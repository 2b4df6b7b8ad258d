#!/usr/bin/env python

from setuptools import setup

def long_description():
    try:
        with open('README.md') as f:
            return f.read()
    except OSError:
        return ''

with open('requirements.txt') as f:
    requirements = [x for x in f.read().splitlines() if x and not x.startswith('#')]

setup(
    name = 'pegmatch',
    version = '0.1.0',
    description = 'parsing expression grammar engine with backreferences',
    long_description = long_description(),
    long_description_content_type = 'text/markdown',
    install_requires = requirements,
    extras_require = {
        'test': ['pytest', 'exemplary'],
    },
    packages = ['pegmatch', 'pegmatch.expressions'],
    python_requires = '>=3.6',
    classifiers = [
        'Development Status :: 2 - Pre-Alpha',
        'Topic :: Software Development :: Interpreters',
        'Topic :: Software Development :: Compilers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
    ],
    platforms = 'any',
    license = 'MIT License',
    keywords = ['parser', 'peg', 'backreferences'],
)
