"""Template rendering: helper functions and the file-writing processor."""

from .functions import base_functions, escape, tf_list, tf_name, to_json
from .processor import TemplateProcessor, build_context

__all__ = [
    "TemplateProcessor",
    "base_functions",
    "build_context",
    "escape",
    "tf_list",
    "tf_name",
    "to_json",
]
