from setuptools import setup, find_packages

setup(
    name="schedvis",
    version="0.1.0",
    description="CPU scheduling policy simulator with an event-stream execution engine",
    author="adamfilli",
    packages=find_packages(include=["schedvis", "schedvis.*"]),
    install_requires=[
        "matplotlib",
        "pandas",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["schedvis=schedvis.__main__:main"],
    },
    include_package_data=True,
    python_requires=">=3.10",
)
