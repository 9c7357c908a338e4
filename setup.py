from setuptools import setup, find_packages

setup(
    name="hashdir",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=["PyYAML>=6.0"],
    extras_require={"test": ["pytest>=7.0"]},
    entry_points={
        "console_scripts": [
            "hashdir=hashdir.client:main",
        ],
    },
)
