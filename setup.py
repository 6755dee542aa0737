from setuptools import setup, find_packages

setup(
    name='ecsctl',
    version='0.1.0',
    packages=find_packages(),
    include_package_data=True,
    install_requires=[
        'typer[all]',
        'rich',
        'boto3',
        'python-dotenv',
    ],
    extras_require={
        'test': [
            'pytest',
        ]
    },
    entry_points={
        'console_scripts': [
            'ecsctl=ecsctl.cli:app'
        ]
    },
    author='Your Name',
    description='A command line client for running and following Amazon ECS tasks',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
