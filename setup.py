"""Setup configuration for DazzleGraphLib."""

from setuptools import setup, find_packages

setup(
    name="dazzlegraphlib",
    version="0.1.0",
    description="Object graph introspection: cycle detection, deep field collection and privileged field access",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    # inspect.get_annotations
    python_requires=">=3.10",
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "black>=23.0",
            "flake8>=6.0",
            "mypy>=1.0",
        ],
    },
)
