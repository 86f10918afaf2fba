from setuptools import setup, find_packages
from pathlib import Path

# Read the long description from the README
long_description = Path(__file__).parent.joinpath("README.md").read_text(encoding="utf-8")

setup(
    name='stylish-mapped',
    version='1.0.0',
    description='Stylish terminal reporter for ESLint results, remapped through source maps',
    long_description=long_description,
    long_description_content_type='text/markdown',

    packages=find_packages(exclude=['tests', 'tests.*']),

    # Runtime dependencies
    install_requires=[
        'colorama>=0.4.6',
        'toml>=0.10.0',
        'PyYAML>=5.1',
    ],
    # Optional dependencies for development
    extras_require={
        'dev': [
            'pytest>=6.0',
            'flake8',
        ],
    },

    # Define console entry point for the CLI
    entry_points={
        'console_scripts': [
            'stylish-mapped=stylish_mapped.cli:main',
        ],
    },

    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.7',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
)
