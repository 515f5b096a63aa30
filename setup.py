from setuptools import setup

setup(
    name='railroute',
    version='0.1.0',
    description='least-cost routes over a timetabled rail network',
    packages=['railroute'],
    py_modules=['config', 'main'],
    install_requires=[
        'click',
        'networkx',
        'pandas>=1.5',
        'tqdm',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['railroute=main:run'],
    },
    python_requires='>=3.8',
)
