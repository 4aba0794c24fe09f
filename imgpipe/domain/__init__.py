"""
Domain Layer

Pure business logic with no external dependencies beyond numpy.
Contains value objects, ports (interfaces) and exceptions.
"""

from .value_objects import *
from .ports import *
from .exceptions import *
