#!/usr/bin/env python3
"""
Setup script for ScaffoldAI

Install with:
    pip install -e .

Or with test tooling:
    pip install -e ".[dev]"
"""

from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

# API server dependencies
server_requirements = [
    "fastapi>=0.110.0",
    "uvicorn[standard]>=0.27.0",
    "pydantic>=2.6.0",
    "pydantic-settings>=2.1.0",
    "slowapi>=0.1.9",
]

# Model client and CLI dependencies
cli_requirements = [
    "anthropic>=0.18.0",
    "httpx>=0.26.0",
    "rich>=13.7.0",
    "python-dotenv>=1.0.0",
]

setup(
    name="scaffoldai",
    version="1.0.0",
    description="ScaffoldAI - AI-assisted project scaffolding over a virtual file tree",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="ScaffoldAI Team",
    license="MIT",
    package_dir={"": "backend", "cli": "cli"},
    packages=find_namespace_packages(where="backend", include=["app", "app.*"]) + ["cli"],
    python_requires=">=3.9",
    install_requires=server_requirements + cli_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "black>=24.1.0",
            "isort>=5.13.0",
            "mypy>=1.8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "scaffoldai=cli.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Framework :: FastAPI",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Code Generators",
    ],
    keywords="ai code-generation scaffolding claude anthropic file-tree",
)
