from setuptools import setup, find_packages
from pathlib import Path

deps = [
    "jsonschema",
    "pyyaml",
    "click",
]

this_directory = Path(__file__).parent

setup(
    name="habitat-provisioner",
    version="0.1.0",
    description="habitat-provisioner - install scripts for Habitat on test nodes",
    long_description=(this_directory / "README.md").read_text(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.7",
    include_package_data=True,
    package_data={"habprov": ["schemas/*.json"]},
    install_requires=deps,
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "habprov-render=habprov.cli:rendercli",
            "habprov-validate=habprov.cli:validatecli",
            "habprov-sandbox=habprov.cli:sandboxcli",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Software Development :: Testing",
        "Topic :: System :: Installation/Setup",
        "Operating System :: OS Independent",
    ],
)
