from setuptools import setup, find_packages

with open("Readme.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="sts-spindle-tracker",
    version="1.0.0",
    author="STS Team",
    description='Suivi web des spindles et des pièces de rechange, stockés en fichiers CSV.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        "sts.web": ["templates/*.html"],
    },
    python_requires='>=3.8',
    install_requires=[
        "Flask>=2.3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
        "dev": [
            "black>=23.0.0",
            "flake8>=6.0.0",
        ],
    },

    entry_points='''
        [console_scripts]
        sts=sts.main:main
    '''
)
