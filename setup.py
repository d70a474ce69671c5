"""Lighthouse setup - writes that survive the dead zone."""
from setuptools import setup, find_packages

setup(
    name="lighthouse-outbox",
    version="0.4.0",
    description="Lighthouse: durable offline outbox for the study tracker",
    packages=find_packages(include=["lighthouse", "lighthouse.*"]),
    python_requires=">=3.10",
    install_requires=[
        "blake3>=0.3",
        "click>=8.0",
        "requests>=2.28",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "lighthouse=lighthouse.cli.main:cli",
        ],
    },
)
