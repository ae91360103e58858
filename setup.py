#!/usr/bin/env python
"""Setup script for the apigw_router package."""

from setuptools import setup, find_packages

setup(
    name="apigw_router",
    version="0.1.0",
    description="First-match request router for API Gateway triggered Lambda functions",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "loguru>=0.7.0",
        "multidict>=6.0.0",
        "orjson>=3.9.0",
        "pyyaml>=6.0",
        "typing-extensions>=4.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-cov",
        ],
    },
    python_requires=">=3.8",
)
