"""Build the senml package."""

from setuptools import setup, find_packages

setup(
    name="senml-resolver",
    version="0.2.0",
    description="SenML (RFC 8428) JSON pack decoder and resolver",
    package_dir={"": "python"},
    packages=find_packages("python"),
    python_requires=">=3.10",
    install_requires=["numpy"],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["senml=senml.cli:main"]},
)
