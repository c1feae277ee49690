from setuptools import find_packages, setup

package_dir = "./"

setup(
    name="tabulon",
    version="0.1.0",
    description=(
        "Typed in-memory tables of time-indexed observations with multi-level metadata"
    ),
    keywords=["PyTorch", "Table", "Time Series", "Motion Capture", "Simulation"],
    license="Apache",
    python_requires=">=3.10",
    package_dir={
        "": package_dir,
    },
    packages=find_packages(package_dir, include=["tabulon", "tabulon.*"]),
    install_requires=[
        "torch",
    ],
    extras_require={
        "test": ["pytest"],
        "docs": [
            "sphinx",
            "furo",
            "recommonmark",
            "sphinx-markdown-tables",
        ],
    },
)
