"""coursecheck — student development environment checker & fixer"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("coursecheck")
except PackageNotFoundError:
    __version__ = "dev"

__author__ = "coursecheck"
