"""Setup script for the Centreon Provider."""

from setuptools import setup, find_packages
import os

# Read the README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "Centreon Provider - declarative host management over the Centreon REST API"

setup(
    name='centreon-provider',
    version='0.1.0',
    description='Reconciliation client and CLI for the Centreon monitoring REST API',
    long_description=read_readme(),
    long_description_content_type='text/markdown',
    author='Centreon Provider Team',
    author_email='dev@example.com',

    packages=find_packages(include=['centreon_provider', 'centreon_provider.*']),
    python_requires='>=3.8',
    install_requires=[
        'requests>=2.31.0',
        'pydantic>=2.0.0',
        'click>=8.1.0',
        'python-dotenv>=1.0.0',
        'PyYAML>=6.0',
        'tomli>=2.0.0',
    ],

    extras_require={
        'dev': [
            'pytest>=7.4.0',
            'pytest-cov>=4.1.0',
            'black>=23.0.0',
            'flake8>=6.0.0',
            'mypy>=1.5.0',
        ],
    },

    entry_points={
        'console_scripts': [
            'centreon-provider=centreon_provider.cli:cli',
        ],
    },

    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: System Administrators',
        'Topic :: System :: Systems Administration',
        'Topic :: System :: Monitoring',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],

    keywords='centreon monitoring infrastructure-as-code automation',

    include_package_data=True,
    zip_safe=False,
)
