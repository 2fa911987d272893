"""
Protonctl package setup.
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="protonctl",
    version="0.1.0",
    description="Install and manage Proton-GE, Wine-GE and ULWGL-Proton builds",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["protonctl.tests", "protonctl.tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Games/Entertainment",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.11",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0,<9",
            "pytest-cov>=4.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "protonctl=protonctl.main:run",
        ],
    },
)
