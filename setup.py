from setuptools import setup, find_packages

setup(name='tmv71rig',
      description='Control backend for the Kenwood TM-V71 transceiver',
      packages=find_packages(include=["tmv71rig*"]),
      version='0.1.0.dev0',
      python_requires=">=3.10,<4",
      install_requires=[
          'pyserial',
      ],
      extras_require={
          'test': ['pytest'],
      },
      entry_points={
          'console_scripts': [
              "tmv71ctl=tmv71rig.cli.main:main",
          ],
      },
      )
