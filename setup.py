from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="databricks-rest-toolkit",
    version="0.1.0",
    description="A thin client for the Databricks REST API: jobs, clusters, libraries, DBFS and workspace",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.7",
    install_requires=[
        "requests>=2.27.0",
        "pandas>=1.3.0",
        "python-dateutil>=2.8.2",
        "pyyaml>=6.0",
        "click>=8.0.0",
        "tabulate>=0.8.9",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "databricks-rest=databricks_rest.cli:main",
        ],
    },
)
