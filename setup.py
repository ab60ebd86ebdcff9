"""Package configuration for jira-burndown-sync.

This file defines installation metadata and console entry points.
"""

import os

import setuptools


def read_requirements(here, filename):
    """Read requirement lines, skipping comments and `-r` includes."""
    try:
        with open(os.path.join(here, filename), encoding="utf-8") as f:
            return [
                line.strip()
                for line in f.read().splitlines()
                if line.strip()
                and not line.strip().startswith("#")
                and not line.strip().startswith("-r ")
            ]
    except OSError:
        return []


def main():
    """Entrypoint for invoking setuptools.setup with package metadata."""

    here = os.path.abspath(os.path.dirname(__file__))

    try:
        with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
            long_description = f.read()
    except OSError:
        long_description = ""

    setuptools.setup(
        name="jira-burndown-sync",
        version="0.1",
        description="Synchronize sprint burndown data from JIRA issues",
        long_description=long_description,
        long_description_content_type="text/markdown",
        license="MIT",
        keywords="agile jira burndown sprint",
        packages=setuptools.find_packages(exclude=["contrib", "docs", "tests*"]),
        install_requires=read_requirements(here, "requirements-prod.txt"),
        extras_require={"test": read_requirements(here, "requirements-dev.txt")},
        python_requires=">=3.8",
        entry_points={
            "console_scripts": [
                "jira-burndown-sync=jira_burndown_sync.cli:main",
            ],
        },
    )


if __name__ == "__main__":
    main()
