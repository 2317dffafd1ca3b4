"""
Setup script for toysqlite.
This is maintained for backward compatibility.
Modern installations should use pyproject.toml.
"""

from setuptools import setup

# All configuration is in pyproject.toml
# This file exists for backward compatibility with older pip versions
setup()
