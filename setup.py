"""
Setup script for subnet-trainer.

Subnet Trainer generates practice questions for number-base conversion
and IP addressing, and checks answers by meaning rather than by string:

1. Conversion drills - binary, hexadecimal and decimal at three difficulties
2. Subnetting drills - basic, VLSM, wildcard/ACL, summarization and IPv6
3. Progress - practice sessions stored with mastery per area

The 'subnet-trainer' command runs the terminal drills; `python main.py`
serves the same generators over HTTP.
"""

from setuptools import find_packages, setup

setup(
    name="subnet-trainer",
    version="0.1.0",
    description="Binary conversion and IP subnetting practice generator with answer checking",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config", "main"],
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Database
        "sqlalchemy>=2.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # API
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
        # HTTP
        "httpx>=0.25.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "subnet-trainer=src.cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: System :: Networking",
    ],
    keywords="subnetting ipv4 ipv6 vlsm binary education cli",
)
