import os
from setuptools import setup, find_packages


def read(filename, parent=None):
    parent = (parent or __file__)
    try:
        with open(os.path.join(os.path.dirname(parent), filename), encoding='utf-8') as f:
            return f.read()
    except IOError:
        return ''


def read_version():
    """Read project version from VERSION file.

    Falls back to '0.0.0' if file missing (should not happen in release).
    """
    return read('VERSION').strip() or "0.0.0"


def parse_requirements(filename, parent=None):
    parent = (parent or __file__)
    filepath = os.path.join(os.path.dirname(parent), filename)
    content = read(filename, parent)

    for line_number, line in enumerate(content.splitlines(), 1):
        candidate = line.strip()
        if not candidate or candidate.startswith('#'):
            continue
        if candidate.startswith('-r'):
            for item in parse_requirements(candidate[2:].strip(), filepath):
                yield item
        else:
            yield candidate


__version__ = read_version()
__project__ = "threadline"

setup(
    name=__project__,
    version=__version__,
    description="Thread resource API: create, list, read, update and delete threads",
    long_description=read('README.md'),
    long_description_content_type="text/markdown",
    # Project uses modern typing (PEP 585/604), requiring Python >= 3.10
    python_requires='>=3.10, <4',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    install_requires=list(parse_requirements('src/threadline/python-requirements.txt')),
    extras_require={
        # Testing dependencies pulled from tests/python-requirements.txt
        'test': list(parse_requirements('tests/python-requirements.txt')),
    },
    entry_points={
        'console_scripts': [
            'threadline-api=threadline.api.run:main',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Framework :: FastAPI',
        'Environment :: Web Environment',
        'Operating System :: OS Independent',
    ],
)
