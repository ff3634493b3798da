"""Rendering of vocabulary models to source files."""

from .renderer import TemplateRenderer, create_environment, java_string

__all__ = ["TemplateRenderer", "create_environment", "java_string"]
