from setuptools import find_packages, setup

__title__ = "oauth2_token_client"
__description__ = "An OAuth 2.0 client library implementing the Token Endpoint exchange, with requests integration."
__version__ = "0.1.0"
__license__ = "Apache 2.0"

with open("README.rst", "rt") as finput:
    readme = finput.read()

with open("requirements.txt", "rt") as finput:
    requires = [line.strip() for line in finput.readlines() if line.strip()]

with open("requirements-test.txt", "rt") as finput:
    test_requires = [line.strip() for line in finput.readlines() if line.strip()]

setup(
    name=__title__,
    version=__version__,
    description=__description__,
    long_description=readme,
    long_description_content_type="text/x-rst",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"": ["LICENSE", "requirements.txt"]},
    package_dir={"oauth2_token_client": "oauth2_token_client"},
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=requires,
    extras_require={"test": test_requires},
    license=__license__,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
    ],
)
