from setuptools import setup, find_packages

install_requires = [
    'numpy',
    'pandas',
    'polars',
    'pyarrow',
    'pyyaml',
    'scikit-learn',
]

setup(
    name='m6a-prediction',
    version='0.1.0',
    description='Site-level m6A modification prediction from tabular RNA features',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.9',
    install_requires=install_requires,

    extras_require={
        'dev': ['pytest', ],
    },

    include_package_data=True,
)
