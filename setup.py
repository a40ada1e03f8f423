"""Setup configuration for buildtimes"""

from setuptools import setup, find_packages

setup(
    name="jenkins-build-durations",
    version="0.1.0",
    description=(
        "CLI tool reporting the durations of recent successful Jenkins builds "
        "per job, with optional keep-forever marking."
    ),
    author="Jenkins Build Durations Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "jenkins-build-durations=buildtimes.main:main",
        ],
    },
)
