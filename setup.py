# setup.py
from setuptools import setup, find_packages

setup(
    name="plotscript",
    version="0.1.0",
    packages=find_packages(include=["plotscript", "plotscript.*"]),
    python_requires=">=3.11",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
