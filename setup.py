"""Build the package."""

import os
import re
from io import open

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))
PACKAGE_NAME = "ics_calendar_mcp"

with open(os.path.join(here, "README.md"), encoding="utf-8") as f:
    readme = f.read()


def _read_version():
    VERSION_FILE = f"{PACKAGE_NAME}/__about__.py"
    ver_str_line = open(os.path.join(here, VERSION_FILE), "rt").read()
    version_re = r"^__version__ = ['\"]([^'\"]*)['\"]"
    mo = re.search(version_re, ver_str_line, re.M)
    if mo:
        version = mo.group(1)
    else:
        raise RuntimeError(f"Unable to find version string in {VERSION_FILE}.")
    return version


setup(
    name="ics-calendar-mcp",
    version=_read_version(),
    author="ics-calendar-mcp Contributors",
    description="Read-only MCP server for today, upcoming and keyword queries over an iCalendar feed",
    long_description=readme,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(exclude=["examples*", "test*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "mcp>=1.2,<2",
        "icalendar>=5.0",
        "requests>=2.28",
        "python-dotenv>=1.0",
        "typer>=0.9",
        "rich>=13.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "ics-calendar=ics_calendar_mcp.cli.main:app",
        ],
    },
    zip_safe=False,
)
