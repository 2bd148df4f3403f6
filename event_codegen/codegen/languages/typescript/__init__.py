"""
TypeScript consumption module renderer.

Generates events.ts with payload interfaces and a reconnecting SSE client.
"""

from .generator import TypeScriptGenerator, create_typescript_generator
from .types import TsType, TypeScriptTypeMapper

__all__ = [
    "TsType",
    "TypeScriptGenerator",
    "TypeScriptTypeMapper",
    "create_typescript_generator",
]
