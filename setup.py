import os

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))

# Single source of truth for the version lives in the package
about = {}
with open(os.path.join(here, "infinits", "__init__.py"), encoding="utf-8") as f:
    for line in f:
        if line.startswith("__version__"):
            about["version"] = line.split("=")[1].strip().strip('"')
            break

setup(
    name="infinits",
    version=about["version"],
    description="Lazy, possibly infinite sequences that clone by replaying "
    "their construction history",
    packages=find_packages(include=["infinits", "infinits.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
)
