from setuptools import setup, find_packages

setup(
    name="smart_paste",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml",
        "rich",
        "textual",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "smartpaste=smart_paste.cli:main",
        ],
    },
    description="Apply a unified diff from the clipboard to a file after a preview.",
)
