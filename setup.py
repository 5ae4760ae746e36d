import setuptools

import atexit
import os
import tempfile

import setuptools.command.install
import setuptools.command.sdist

root_dir = os.path.dirname(os.path.abspath(__file__))

with open(os.path.join(root_dir, 'README.md'),
          'r',
          newline='\n',
          encoding='utf-8') as f:
    long_description = f.read()


def _setup_temp_egg_info(cmd):
    """Use a temporary directory for the `.egg-info` directory.

  When building an sdist (source distribution) or installing, locate the
  `.egg-info` directory inside a temporary directory so that it
  doesn't litter the source directory and doesn't pick up a stale SOURCES.txt
  from a previous build.
  """
    egg_info_cmd = cmd.distribution.get_command_obj('egg_info')
    if egg_info_cmd.egg_base is None:
        tempdir = tempfile.TemporaryDirectory(dir=os.curdir)
        egg_info_cmd.egg_base = tempdir.name
        atexit.register(tempdir.cleanup)


class SdistCommand(setuptools.command.sdist.sdist):
    def run(self):
        _setup_temp_egg_info(self)
        super().run()

    def make_release_tree(self, base_dir, files):
        # Exclude .egg-info from source distribution.
        files = [x for x in files if '.egg-info' not in x]
        super().make_release_tree(base_dir, files)


class InstallCommand(setuptools.command.install.install):
    def run(self):
        _setup_temp_egg_info(self)
        super().run()


setuptools.setup(
    name='ofx-statement',
    # Use setuptools_scm to determine version from git tags
    use_scm_version={
        'version_scheme': 'no-guess-dev',
        'local_scheme': 'no-local-version',
        'fallback_version': '0.0.0',
    },
    description='Typed parsing of OFX 1.x bank and credit card statements.',
    long_description=long_description,
    long_description_content_type='text/markdown',
    license='GPLv2',
    packages=[
        'ofx_statement',
    ],
    python_requires='>=3.8',
    setup_requires=['setuptools_scm>=5.0.2'],
    install_requires=[
        'beancount>=2.1.3',
        'beautifulsoup4>=4.10',
        'python-dateutil',
        'pycountry>=22.1.10',
    ],
    extras_require={
        'test': [
            'pytest',
            'coverage',
        ],
    },
    entry_points={
        'console_scripts': [
            'ofx-statement=ofx_statement.cli:main',
        ],
    },
    cmdclass={
        'sdist': SdistCommand,
        'install': InstallCommand,
    },
)
