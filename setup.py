from pathlib import Path
from setuptools import setup, find_packages


# Package metadata
NAME = "StructGrid"
VERSION = "0.1.0"
DESCRIPTION = "Interactive TUI visualizer for C struct layout, padding and alignment"
AUTHOR = "Tomer Goldschmidt"

# Required packages
REQUIRED = [
    "textual>=0.48.0",
    "rich",
    "construct",
    "numpy",
]

# Optional dependencies
EXTRAS = {
    "test": ["pytest"],
}


# Read the README file
readme_path = Path(__file__).parent / "README.md"
if readme_path.exists():
    with open(readme_path, "r", encoding="utf-8") as f:
        long_description = f.read()
else:
    long_description = DESCRIPTION


setup(
    name=NAME,
    version=VERSION,
    description=DESCRIPTION,
    long_description=long_description,
    long_description_content_type="text/markdown",
    author=AUTHOR,
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=REQUIRED,
    extras_require=EXTRAS,
    include_package_data=True,
    entry_points={
        "console_scripts": [
            "structgrid = structgrid.main:main",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Compilers",
        "Topic :: Utilities",
    ],
    python_requires=">=3.9",
)
