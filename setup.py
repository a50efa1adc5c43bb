from setuptools import find_packages, setup

VERSION = '1.0.0'


def parse_readme():
    try:
        with open('README.md', 'r') as fh:
            return fh.read()
    except OSError:
        return ''


TEST_REQS = [
    'coverage>=4.2',
    'pycodestyle>=2.3.1',
    'pytest',
    'pytest-cov',
]


INSTALL_REQS = [
    'biopython>=1.70',
    'braceexpand>=0.1.2',
    'colour',
    'jsonschema',
    'networkx>=2.0',
    'svgwrite',
]

DEPLOY_REQS = ['twine', 'wheel']


setup(
    name='rdgraph',
    version='{}'.format(VERSION),
    packages=find_packages(exclude=['tests', 'tests.*']),
    package_data={'rdgraph.schemas': ['*.json']},
    description='Ribosome Decision Graph modelling and construct design',
    long_description=parse_readme(),
    long_description_content_type='text/markdown',
    install_requires=INSTALL_REQS,
    extras_require={
        'test': TEST_REQS,
        'dev': ['black', 'flake8'] + TEST_REQS + DEPLOY_REQS,
        'deploy': DEPLOY_REQS,
    },
    tests_require=TEST_REQS,
    python_requires='>=3.7',
    test_suite='tests',
    entry_points={'console_scripts': ['rdgraph = rdgraph.main:main']},
)
