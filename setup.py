# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="dusk",
    version="1.1.0",
    description="Disk Usage SKanner: scan a directory tree once and browse it interactively by size",
    author="Jake Morgan",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["dusk", "dusk.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "dusk=dusk.main:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Environment :: Console",
        "Operating System :: POSIX",
    ],
)
