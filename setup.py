import os

from setuptools import setup


ver_path = os.path.join(os.path.dirname(__file__), 'chunkreader', 'version.py')
with open(ver_path) as ver_file:
    __version__ = ''
    exec(compile(ver_file.read(), ver_path, 'exec'))


requires = ['attrs']

tests_require = ['pytest']

classifiers = [
    'Programming Language :: Python :: 3',
    'Topic :: Multimedia :: Sound/Audio',
]

setup(
    name='chunkreader',
    version=__version__,
    description='Bounded readers for RIFF and IFF style chunk containers',
    classifiers=classifiers,
    keywords='riff iff aiff chunk',
    packages=['chunkreader', 'chunkreader.tests'],
    include_package_data=True,
    zip_safe=False,
    install_requires=requires,
    extras_require={'test': tests_require},
    entry_points={'console_scripts': ['chunkreader = chunkreader.main:main']},
)
