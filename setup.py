import os
from setuptools import setup, find_packages

version = '1.0'

here = os.path.dirname(__file__)

with open(os.path.join(here, 'README.rst')) as fp:
    longdesc = fp.read()

with open(os.path.join(here, 'CHANGELOG.rst')) as fp:
    longdesc += "\n\n" + fp.read()

setup(
    name='python-pcapng-writer',
    version=version,
    packages=find_packages(exclude=['tests', 'tests.*', 'examples']),
    license='Apache Software License 2.0',
    description='Library to write the pcap-ng format '
    'used by various packet sniffers',
    long_description=longdesc,
    python_requires='>=3.7',
    install_requires=[],
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        "License :: OSI Approved :: Apache Software License",

        # "Development Status :: 1 - Planning",
        # "Development Status :: 2 - Pre-Alpha",
        # "Development Status :: 3 - Alpha",
        "Development Status :: 4 - Beta",
        # "Development Status :: 5 - Production/Stable",

        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",

        # Should work on all implementations, but further
        # testing is still needed..
        "Programming Language :: Python :: Implementation :: CPython",
    ],
    package_data={'': ['README.rst', 'CHANGELOG.rst']},
    zip_safe=False)
