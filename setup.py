from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="relativetime",
    version="0.0.1",
    author="Peter Cotton",
    author_email="",
    description="Relative time phrases with time zone aware calendar differences",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/petercotton/relativetime",
    packages=find_packages(include=["relativetime", "relativetime.*"]),
    include_package_data=True,
    package_data={
        'relativetime': ['zones/data/*.parquet', 'zones/data/*.csv'],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "pandas>=1.3.0",
        "rapidfuzz>=2.0.0",
        "pyarrow>=10.0.0",
        "python-dateutil>=2.8.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
)
