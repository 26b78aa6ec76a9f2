"""Setup script for the Claude dashboard status line."""

from pathlib import Path

from setuptools import find_packages, setup

# Read requirements from requirements.txt
requirements_file = Path(__file__).parent / "requirements.txt"
with open(requirements_file, encoding="utf-8") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

# Read version from claude_dashboard/__version__.py
version_file = Path(__file__).parent / "claude_dashboard" / "__version__.py"
version = {}
with open(version_file, encoding="utf-8") as f:
    exec(f.read(), version)

# Read long description from README
readme_file = Path(__file__).parent / "README.md"
with open(readme_file, encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="claude-dashboard",
    version=version["__version__"],
    description="A multi-line status bar for Claude Code showing context, rate limits and session activity",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=8.0"],
    },
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "claude-dashboard=claude_dashboard.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Utilities",
    ],
    keywords="claude cli statusline dashboard rate-limit",
)
