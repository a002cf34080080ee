"""
coursesite - Markdown course lessons as a website

Installation:
    pip install -e .

This installs the 'coursesite' command globally in your environment.
"""

from setuptools import setup, find_packages
import os

# Read README for long description
long_description = ''
if os.path.exists('README.md'):
    with open('README.md', 'r', encoding='utf-8') as f:
        long_description = f.read()

setup(
    name='coursesite',
    version='1.0.0',
    description='Markdown course lessons as a website',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Dale Chapman',
    author_email='',
    license='MIT',

    # Find all packages (coursesite/ and any subpackages)
    packages=find_packages(exclude=['tests', 'tests.*', 'docs', 'content']),

    # Page templates ship inside the package
    package_data={
        'coursesite': ['templates/*.html'],
    },
    include_package_data=True,

    # Python version requirement
    python_requires='>=3.10',

    # Dependencies
    install_requires=[
        'click>=8.0',
        'python-frontmatter>=1.0',
        'PyYAML>=6.0',
        'markdown>=3.4',
        'requests>=2.28',
        'pydantic>=2.0',
        'fastapi>=0.110',
        'uvicorn>=0.23',
        'jinja2>=3.1',
    ],

    # Optional dependencies
    extras_require={
        'dev': [
            'pytest>=7.4',
            'pytest-cov>=4.1',
            'pytest-mock>=3.11',
            'httpx>=0.24',
        ],
    },

    # CLI entry point - this creates the 'coursesite' command
    entry_points={
        'console_scripts': [
            'coursesite=coursesite.cli:cli',
        ],
    },

    # Classifiers for PyPI
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Education',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Framework :: FastAPI',
        'Topic :: Education',
    ],

    # Keywords for discoverability
    keywords='course lessons markdown website education',
)
