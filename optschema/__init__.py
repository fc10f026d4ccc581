"""
optschema: option schemas for command-line programs, derived from documented
TypeScript declarations.
"""

__version__ = "1.0.0"
