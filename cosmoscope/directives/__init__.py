"""
Command extractor.

Classifies assistant replies as SetLocation, ShowRoute or PlainAnswer.
"""

from cosmoscope.directives.contracts import Directive, PlainAnswer, SetLocation, ShowRoute
from cosmoscope.directives.extractor import classify_command, extract_directive
from cosmoscope.directives.scanner import find_balanced_span

__all__ = [
    "Directive",
    "PlainAnswer",
    "SetLocation",
    "ShowRoute",
    "classify_command",
    "extract_directive",
    "find_balanced_span",
]
