from setuptools import setup, find_packages

setup(
    name="university-enricher",
    version="0.1.0",
    packages=find_packages(include=["university_enricher", "university_enricher.*"]),
    python_requires=">=3.10",
    install_requires=[
        "openai>=1.30.0",
        "pydantic>=2.5.0",
        "python-dotenv>=1.0.0",
        "requests>=2.31.0",
        "pandas>=2.1.0",
        "openpyxl>=3.1.0",
        "rapidfuzz>=3.5.0",
        "click>=8.1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "httpx>=0.25.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "university-enricher=university_enricher.cli:cli",
        ],
    },
)
