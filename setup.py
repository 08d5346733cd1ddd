from setuptools import setup, find_packages

setup(
    name="sudoku-propagation",
    version="1.0.0",
    description="Candidate propagation engine for 9x9 Sudoku",
    author="robomotic",
    packages=find_packages(include=["sudoku_propagation", "sudoku_propagation.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.6.0",
        "seaborn>=0.11.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "sudoku-propagate=sudoku_propagation.cli:main",
        ],
    },
)
