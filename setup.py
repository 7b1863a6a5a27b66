from setuptools import setup, find_packages

from pyzwo.__version__ import __version__

with open("README.md", "r", encoding="utf-8") as f:
  long_description = f.read()


extras_dev = [
  "pytest",
  "pytest-timeout",
  "pylint",
  "mypy",
]

setup(
  name="PyZWO",
  version=__version__,
  packages=find_packages(include=["pyzwo", "pyzwo.*"]),
  description="Control ZWO EAF focusers and EFW filter wheels over USB HID",
  long_description=long_description,
  long_description_content_type="text/markdown",
  install_requires=["hid", "typing_extensions"],
  package_data={"pyzwo": ["version.txt"]},
  extras_require={
    "dev": extras_dev,
  },
  entry_points={
    "console_scripts": [
      "zwoeaf-set=pyzwo.cmd.zwoeaf_set:main",
      "zwoefw-set=pyzwo.cmd.zwoefw_set:main",
    ],
  }
)
