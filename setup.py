"""
Setup script for todostore.
"""
from setuptools import setup, find_packages

setup(
    name="todostore",
    version="0.1.0",
    description="Todo records on MySQL, PostgreSQL, MongoDB or SQLite behind one storage contract",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.1.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "psycopg2-binary>=2.9",
        "PyMySQL>=1.1",
        "pymongo>=4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "todostore=todostore.__main__:main",
            "todo=todostore.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
