"""Setup configuration for formjson package."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README file
readme_file = Path(__file__).parent / "README.md"
long_description = (
    readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""
)

setup(
    name="formjson",
    version="1.0.0",
    description="Validate Japanese form input incrementally and convert it to JSON, in the terminal or from the command line",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["formjson", "formjson.*"]),
    python_requires=">=3.9",
    install_requires=[
        "prompt_toolkit>=3.0.0",
        "pyperclip>=1.8.0",  # System clipboard backend for prompt_toolkit
        "pyyaml>=6.0",
        "regex>=2022.1.18",  # Unicode script properties (\p{sc=Han})
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=22.0.0",
            "flake8>=5.0.0",
            "mypy>=0.990",
        ],
    },
    entry_points={
        "console_scripts": [
            "formjson=formjson.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Environment :: Console",
        "Natural Language :: Japanese",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    keywords="form validation json converter tui prompt-toolkit japanese",
)
