#!/usr/bin/env python3
"""
Setup script for Inkwell - static site generator.
"""

from setuptools import setup, find_packages
import os

# Read the contents of README file
this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='inkwell-ssg',
    version='1.0.0',
    description='A small static site generator for personal writing, with a built-in safe markdown converter',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(include=['inkwell_pkg', 'inkwell_pkg.*']),
    package_data={
        'inkwell_pkg': [
            'templates/*.html',
            'assets/css/*.css',
            'assets/js/*.js',
        ],
    },
    include_package_data=True,
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Internet :: WWW/HTTP :: Site Management',
        'Topic :: Software Development :: Code Generators',
        'Topic :: Text Processing :: Markup :: HTML',
    ],
    python_requires='>=3.8',
    install_requires=[
        'PyYAML>=6.0',
        'csscompressor>=0.9.5',
        'rjsmin>=1.2.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-cov>=4.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'inkwell=inkwell_pkg.cli:main',
        ],
    },
    keywords='static site generator, markdown, blog, rss, sitemap',
)
