"""
Target-specific renderers.

``cpp`` renders the emission header, ``typescript`` the consumption module.
"""

from .cpp import CppGenerator, create_cpp_generator
from .typescript import TypeScriptGenerator, create_typescript_generator

__all__ = [
    "CppGenerator",
    "TypeScriptGenerator",
    "create_cpp_generator",
    "create_typescript_generator",
]
