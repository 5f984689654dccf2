import setuptools

with open("README.rst", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="notespaces",
    version="0.1.0",
    description="Short numbered notes kept in switchable named spaces.",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    packages=setuptools.find_packages('src'),
    package_dir={'': 'src'},
    entry_points={
        'console_scripts': [
            'notespaces = notespaces.cli:main'
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        'terminaltables',
    ],
    extras_require={
        'test': [
            'pytest',
            'pyfakefs',
            'pytest-mock',
        ],
    },
    python_requires='>=3.7',
)
