"""
C++ emission module renderer.

Generates Events.hpp with one typed Emit function per event.
"""

from .generator import CppGenerator, create_cpp_generator
from .naming import create_cpp_sanitizer
from .types import CppType, CppTypeConfig, CppTypeMapper

__all__ = [
    "CppGenerator",
    "CppType",
    "CppTypeConfig",
    "CppTypeMapper",
    "create_cpp_generator",
    "create_cpp_sanitizer",
]
