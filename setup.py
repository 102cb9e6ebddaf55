from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="neardupe",
    version="0.1.0",
    author="Peter Cotton",
    author_email="",
    description="Near-duplicate hashing for place names and addresses",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/petercotton/neardupe",
    packages=find_packages(exclude=["tests", "tests.*", "scripts", "scripts.*"]),
    include_package_data=True,
    package_data={
        'neardupe': ['resources/data/*.yaml'],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.3.0",
        "rapidfuzz>=2.0.0",
        "pyarrow>=10.0.0",
        "pyyaml>=6.0",
        "pycountry>=22.0.0",
        "country_converter>=1.0.0",
        "metaphone>=0.6",
        "pygeohash>=1.2.0",
        "pypinyin>=0.49.0",
        "Unidecode>=1.3.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
)
