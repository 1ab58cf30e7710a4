from setuptools import setup, find_packages

setup(
    name="heatsim",
    version="0.1.0",
    description="Lumped-mass house heating simulation: constant heating vs night setback",
    packages=find_packages(include=["heatsim", "heatsim.*"]),
    py_modules=["main"],
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
        "matplotlib",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["heatsim=main:run_main"],
    },
)
