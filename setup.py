import setuptools
import sys

pure_python = False
pure_notice = "\n\n**Warning!** *This package is the zero-dependency version of Berkanan, which computes all digests with the interpreter's built-in hashlib. You should almost certainly use the [normal package](https://pypi.org/project/berkanan) instead.*"

if '--pure' in sys.argv:
    pure_python = True
    sys.argv.remove('--pure')
    print("Building pure-python wheel")

exec(open("Berkanan/_version.py", "r").read())

with open("README.md", "r") as fh:
    long_description = fh.read()

if pure_python:
    pkg_name = "berkananpure"
    requirements = []
    long_description = long_description+pure_notice
else:
    pkg_name = "berkanan"
    requirements = ['cryptography>=3.4.7']

setuptools.setup(
    name=pkg_name,
    version=__version__,
    author="IZE",
    description="MD5, SHA-1 and SHA-256 digests over byte buffers, backed by vetted cryptographic providers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=requirements,
    python_requires='>=3.6',
)
