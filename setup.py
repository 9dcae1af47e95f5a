# Usage: python setup.py bdist_wheel

import setuptools  # type: ignore

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name='proplogic',
    version='0.1.0',
    author="Thomas Sturm",
    author_email="tsturm@me.com",
    description="Propositional logic in Python: truth tables and normal forms",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/thomas-sturm/logic1",
    packages=setuptools.find_packages(
        exclude=['tests']
    ),
    python_requires='>=3.11',
    install_requires=[
        'IPython',
        'typing_extensions'
    ],
    extras_require={
        'test': ['pytest', 'sympy']
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD-2-Clause",
        "Operating System :: OS Independent",
    ],
)
