from setuptools import setup, find_packages

setup(
    name="callthrottle",
    version="0.1.0",
    description="Rate-limited function wrappers that queue excess calls instead of dropping them",
    author="adamfilli",
    packages=find_packages(include=["callthrottle", "callthrottle.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
