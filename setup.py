from pathlib import Path
from setuptools import setup, find_packages

here = Path(__file__).parent
version_ns = {}
with open(here / "guac_users" / "_version.py") as f:
    exec(f.read(), {}, version_ns)

setup(
    name="guac-users",
    version=version_ns["__version__"],
    description="A client for the Guacamole user management REST API",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "anyio",
        "httpx",
        "pydantic>=2",
        "pydantic-core",
        "rich-click",
        "structlog",
        "typing_extensions; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "click",
            "fastapi",
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": ["guac-users = guac_users.cli:main"],
    },
    classifiers=(
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ),
)
