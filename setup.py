# setup.py
from setuptools import setup, find_packages

setup(
    name="gzbindata",
    version="0.1.0",
    description="Embed files as gzip-compressed data in generated Python modules",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'gzbindata=gzbindata.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
