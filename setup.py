# setup.py
from setuptools import setup, find_packages

setup(
    name="lispy",
    version="0.0.0.5",
    description="Tree-walking evaluator for a small S-expression / Q-expression language",
    packages=find_packages(include=["lispy", "lispy.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["lispy=lispy.repl:main"],
    },
    zip_safe=False,
)
