# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="shrem",
    version="0.1.0",
    description="Overwrite files with shred and remove whole directory trees without leaving their names behind",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["shrem", "shrem.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'shrem=shrem.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX",
        "Environment :: Console",
    ],
)
