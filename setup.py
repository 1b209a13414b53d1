# setup.py
from setuptools import setup, find_packages

setup(
    name='viewextract',
    version='0.1.0',
    description='Reach the native views behind declarative widgets.',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',

    # Finds `viewextract` and `viewextract_cli`.
    packages=find_packages(include=['viewextract', 'viewextract.*', 'viewextract_cli', 'viewextract_cli.*']),
    include_package_data=True,

    install_requires=[
        'PySide6',
        'PyYAML',
        'typer[all]',
    ],
    extras_require={
        'test': ['pytest'],
    },

    # Creates an executable script named `viewextract` that calls the `app`
    # object inside `viewextract_cli.main`.
    entry_points={
        'console_scripts': [
            'viewextract = viewextract_cli.main:app',
        ],
    },

    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: User Interfaces',
    ],
    python_requires='>=3.10',
)
