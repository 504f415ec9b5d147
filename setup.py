from setuptools import setup, find_packages

setup(
    name="td_lib",
    version="0.1.0",
    description="Tabular temporal-difference learning with concurrent play and training",
    packages=find_packages(exclude=["*.tests", "tools"]),
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=1.5.0",
        "matplotlib>=3.7.0",
        "python-dotenv>=1.0.0",
        "tqdm>=4.65.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    python_requires=">=3.8",
)
