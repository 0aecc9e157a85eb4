# To install locally: pip install .
# To install for development, with the test dependencies: pip install -e ".[test]"
#
# To push a version through to pip.
#  - Make sure it installs correctly locally as above
#  - Update the version information in this file
# With twine:
#  - python -m build --sdist
#  - twine upload dist/*


from setuptools import setup, find_packages

from os import path
import io

# in development set version to none and ...
PYPI_VERSION = "0.3.0"  # Note: don't add any dashes if you want to use conda, use b1 not .b1


this_directory = path.abspath(path.dirname(__file__))
with io.open(path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()


if __name__ == "__main__":
    setup(name = 'cartokit',
          author            = "The cartokit developers",
          version           = PYPI_VERSION,
          description       = "Choropleth maps with sensible cartographic defaults, on top of GeoPandas and Cartopy",
          long_description  = long_description,
          long_description_content_type='text/markdown',
          python_requires   = '>=3.9',
          install_requires  = ['numpy>=1.16.0',
                               'pandas',
                               'shapely>=2.0',
                               'matplotlib>=3.7',
                               'cartopy>=0.21',
                               'geopandas>=0.12',
                               'pyproj',
                               'mapclassify>=2.4',
                               'contextily',
                               'xyzservices',
                               'pyyaml',
                               ],
          extras_require    = {'test': ['pytest']},
          packages          = find_packages(include=['cartokit', 'cartokit.*']),
          package_data      = {'cartokit': ['logging_config.yaml']},
          include_package_data = True,
          entry_points      = {'console_scripts': ['cartokit = cartokit.__main__:main']},
          classifiers       = ['Programming Language :: Python :: 3',
                               'Programming Language :: Python :: 3.9',
                               'Programming Language :: Python :: 3.10',
                               'Programming Language :: Python :: 3.11',
                               'Programming Language :: Python :: 3.12',
                               ]
          )
