"""
Setup script for surge-core

Pure Python package: the kernels resolve BLAS/LAPACK routines through
scipy at runtime, so there is nothing to compile here.
"""

from pathlib import Path
from setuptools import setup, find_packages


# Read version from src/surge/__init__.py
def get_version():
    version_file = Path("src/surge/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    readme = Path("README.md")
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="surge-core",
    version=get_version(),
    description="Strided views over numeric buffers with BLAS/LAPACK-backed arithmetic",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    zip_safe=True,
)
