"""
Generator package: the generate-and-write step for the preference file.
"""

from .task import ResourceEncodingGenerator, generate_for_project

__all__ = ["ResourceEncodingGenerator", "generate_for_project"]
