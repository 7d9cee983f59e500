from setuptools import setup, find_packages
import re

# Read version from salarycal/__init__.py
with open('salarycal/__init__.py') as f:
    version = re.search(r'^__version__ = ["\']([^"\']+)["\']', f.read(), re.MULTILINE).group(1)

setup(
    name='salary-calendar',
    version=version,
    packages=find_packages(include=['salarycal', 'salarycal.*']),
    install_requires=[
        'PyYAML>=6.0',
        'click>=8.0',
        'httpx>=0.24',
        'pydantic>=2.0.0',
        'rich>=13.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-asyncio>=0.21',
        ],
    },
    entry_points={
        'console_scripts': [
            'salary-calendar=salarycal.cli.__main__:main',
        ],
    },
    author='Personal',
    description='Upcoming salary payment schedule with the Russian production calendar and vacations.',
    python_requires='>=3.10',
)
