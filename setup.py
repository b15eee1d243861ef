from pathlib import Path

from setuptools import find_packages, setup


README = Path(__file__).resolve().parent / "README.md"

setup(
    name="classcatalog",
    version="0.1.0",
    description="Registrar class schedule scraper – per-term course catalogs as JSON",
    long_description=README.read_text(encoding="utf-8") if README.exists() else "",
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests",)),
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.28",
        "beautifulsoup4>=4.11",
        "rich>=13.0",
    ],
    extras_require={"dev": ["pytest>=7.0"]},
    entry_points={"console_scripts": ["classcatalog=classcatalog.cli:main"]},
)
