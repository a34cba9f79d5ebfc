#!/usr/bin/env python3
import setuptools

setuptools.setup(
    name="order-import",
    version="0.1.0",
    packages=["order_import"],
    python_requires=">=3.11",
    install_requires=[
        "click",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "order-import = order_import.cli:main",
        ],
    },
    author="",
    description="Command-line tool to sort, group and align JavaScript/TypeScript import blocks",
    license="MIT",
)
