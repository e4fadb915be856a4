from setuptools import setup, find_packages

setup(
    name = "paperscrape",
    version = "0.1.0",
    packages = find_packages(include=["paperscrape", "paperscrape.*"]),
    install_requires=[
        "aiofiles",
        "aiohttp",
        "loguru",
        "pydantic>=2",
        "PyYAML",
        "pdfplumber>=0.11",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio==1.1.0",
            "reportlab",
        ],
    },
    entry_points={
        "console_scripts": [
            "paperscrape = paperscrape.pipeline:cli",
        ],
    },
    python_requires = ">=3.9",
)
