from __future__ import annotations

from setuptools import find_namespace_packages, setup

install_requires: list[str] = [
    "numpy>=1.24",
    "Pillow>=9.1",
    "PyYAML>=6.0",
]

extras_require: dict[str, list[str]] = {
    "test": ["pytest>=7", "pytest-benchmark>=4"],
}

setup(
    name="fastthumbhash",
    version="0.1.0",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["fastthumbhash", "fastthumbhash.*"]),
    install_requires=install_requires,
    extras_require=extras_require,
    entry_points={"console_scripts": ["fastthumbhash=fastthumbhash.__main__:main"]},
)
