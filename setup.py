from setuptools import find_packages, setup

setup(
    name="olastretch",
    version="0.1.0",
    description="Constant-pitch time-scale modification of audio by time-domain overlap-add.",
    author="Araray Velho",
    author_email="araray@gmail.com",
    packages=find_packages(include=["olastretch", "olastretch.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "librosa",
        "soundfile",
        "click",
        "pydantic>=2",
        "toml",
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "olastretch=olastretch.cli.main:cli",
        ],
    },
)
