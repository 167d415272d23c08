from setuptools import setup, find_packages

setup(
    name="tictactoe_mtdf",
    version="0.1",
    description="Tic-tac-toe on arbitrary board sizes with an MTD(f) search engine",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
