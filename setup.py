"""Setup configuration for reviewtracker"""

from setuptools import setup, find_packages

setup(
    name="review-tracker",
    version="0.1.0",
    description=(
        "CLI tool that rebuilds a manuscript's peer-review timeline: revisions, "
        "reviewers, and their invitation, acceptance and completion dates."
    ),
    author="Review Tracker Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "review-tracker=reviewtracker.main:main",
        ],
    },
)
