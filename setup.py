"""Packaging settings."""
from codecs import open as codecs_open
from os.path import abspath, dirname, join

from setuptools import find_packages, setup

THIS_DIR = abspath(dirname(__file__))


with codecs_open(join(THIS_DIR, "README.md"), encoding="utf-8") as readfile:
    LONG_DESCRIPTION = readfile.read()


INSTALL_REQUIRES = [
    "boto3>=1.28,<2.0",
    "botocore>=1.31",  # matching boto3 requirement
    "pydantic>=2.0,<3.0",
    "typing_extensions",  # only really needed for < 3.11 but can still be used in 3.11+
]

TESTS_REQUIRE = [
    "boto3-stubs[ssm]",  # type-only imports under TYPE_CHECKING
    "pytest",
    "pytest-mock",
]


setup(
    name="orcdk-plugin-ssm-cleanup",
    version="1.0.0",
    description="Delete SSM parameters left behind by destroyed stacks",
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    license="Apache License 2.0",
    classifiers=[
        "Intended Audience :: Developers",
        "Topic :: Utilities",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    keywords="aws ssm parameter-store cleanup plugin",
    packages=find_packages(exclude=("tests*",)),
    install_requires=INSTALL_REQUIRES,
    extras_require={"test": TESTS_REQUIRE},
    entry_points={
        "orcdkestrator.plugins": ["ssm-cleanup=ssm_cleanup:SsmCleanupPlugin"]
    },
)
