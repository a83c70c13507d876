import os
from setuptools import setup, find_packages

def load_text(path):
    with open(path) as f:
        return f.read()

# load information about package
path = os.path.join(os.path.dirname(__file__), "primatte", "__about__.py")
about = {}
exec(load_text(path), about)

setup(
    name=about["__title__"],
    version=about["__version__"],
    author=about["__author__"],
    description=about["__summary__"],
    long_description=load_text("README.md"),
    long_description_content_type="text/markdown",
    license=about["__license__"],
    packages=find_packages(exclude=["tests", "examples"]),
    install_requires=load_text("requirements.txt").strip().split("\n"),
    extras_require={
        "test": ["pytest"],
    },
    keywords='chroma key alpha matting',
    python_requires='>=3.8',
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
