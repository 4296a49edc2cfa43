# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="prgraph",
    version="1.0.0",
    description="Render the files changed by a GitHub pull request as a compact directory tree",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["prgraph", "prgraph.*"]),
    install_requires=[
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'prgraph=prgraph.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
