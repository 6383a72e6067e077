import setuptools
from simpleaf.__init__ import __VERSION__

with open("README.md", "r") as fh:
    long_description = fh.read()

with open('requirements.txt') as fp:
    install_requires = fp.read()

entry_dict = {
        'console_scripts': ['simpleaf=simpleaf.simpleaf:main'],
}


setuptools.setup(
    name="simpleaf",
    version=__VERSION__,
    description="A simple interface to alevin-fry single-cell RNA-seq workflows",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
    python_requires='>=3.7',
    include_package_data=True,
    entry_points=entry_dict,
    install_requires=install_requires,
    extras_require={
        'test': ['pytest'],
    },
)
