from setuptools import setup, find_packages

with open("README.md", "r") as f:
    long_description = f.read()

setup(
    name="tldsplit",
    version="1.0.0",
    author="Dominick C. Pastore",
    author_email="tldsplit@dcpx.org",
    description="Split hosts into subdomain, domain, and public suffix using "
                "the Public Suffix List",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/dominickpastore/tldsplit/",
    license="GPLv3+",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: "
        "GNU General Public License v3 or later (GPLv3+)",
        "Topic :: Internet :: Name Service (DNS)",
    ],

    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests",
        "idna",
        "importlib_metadata; python_version<'3.10'",
    ],
    python_requires=">=3.7",
    extras_require={
        "docs": ["sphinx"],
        "test": [
            "flake8",
            "pytest",
            "pytest-cov",
            "pytest-mock",
        ]
    },

    entry_points={
        "console_scripts": [
            "tldsplit=tldsplit.main:main",
        ],
    },
)
