from setuptools import setup, find_packages

setup(
    name='firebehave',
    version='0.1',
    packages=find_packages(),
    package_data={
        'firebehave.models': ['FuelModels.json', 'MoistureScenarios.json'],
    },
    install_requires=[
        'numpy',
    ],
    extras_require={
        'dev': [
            'pytest>=7.0',
            'pytest-cov>=4.0',
            'ruff>=0.1.0',
        ],
    },
    python_requires='>=3.9',
)
