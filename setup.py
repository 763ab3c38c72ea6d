from setuptools import setup, find_packages

setup(
    name='clockiXL',
    version='0.1.0',
    description='A CLI tool for exporting Clockify time entries to an Excel spreadsheet.',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'requests',
        'tabulate',
        'python-dotenv',
        'markdown',
        'openpyxl',
        'fastapi',
        'uvicorn',
        'pydantic',
    ],
    extras_require={
        'test': ['httpx'],
    },
    entry_points={
        'console_scripts': [
            'clockixl=clockixl.__main__:main',
        ],
    },
    include_package_data=True,
    package_data={
        '': ['clockixl.env.example'],
    },
    python_requires='>=3.8',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
)
