# setup.py - Package the term machine
from setuptools import setup, find_packages

setup(
    name="term_machine",
    version="0.1.0",
    packages=find_packages(include=["term_machine", "term_machine.*"]),
    python_requires=">=3.8",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
)
