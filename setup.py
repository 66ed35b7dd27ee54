from setuptools import setup, find_packages

setup(
    name="dyarr",
    version="0.1.0",
    packages=find_packages(include=["dyarr", "dyarr.*"]),
    package_data={"dyarr": ["configs/*.yaml"]},
    install_requires=[
        "numpy",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
