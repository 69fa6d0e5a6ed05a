"""Setup script for orthomps."""
from setuptools import setup, find_packages

requirements = open('requirements.txt').readlines()

description = ('orthomps - matrix product states kept in canonical form')

# README file as long_description.
long_description = open('README.md', encoding='utf-8').read()

__version__ = '0.1.0'

setup(
    name='orthomps',
    version=__version__,
    author='The orthomps Authors',
    license='Apache License 2.0',
    platforms=['any'],
    python_requires=('>=3.9'),
    install_requires=requirements,
    extras_require={'test': ['pytest']},
    description=description,
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=('tests', 'tests.*'))
)
