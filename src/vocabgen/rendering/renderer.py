"""
Template renderer for generated vocabulary sources.

Renders a VocabularyModel with one of the packaged Jinja2 templates
(``modern.java.j2``, ``legacy.java.j2``, ``strings.java.j2``), selected by
OutputType. Undefined template variables raise instead of rendering empty.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from vocabgen import __version__
from vocabgen.core.errors import RenderError
from vocabgen.shared.models import OutputType, VocabularyModel

logger = logging.getLogger(__name__)


def java_string(value: Any) -> str:
    """Escape a value for use inside a Java string literal."""
    text = "" if value is None else str(value)
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def create_environment() -> Environment:
    """Build the Jinja2 environment over the packaged templates."""
    env = Environment(
        loader=PackageLoader("vocabgen", "rendering/templates"),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )
    env.filters["java_string"] = java_string
    return env


class TemplateRenderer:
    """
    Renders vocabulary models to source text.

    Example:
        renderer = TemplateRenderer(OutputType.STRINGS)
        source = renderer.render(model)
    """

    _environment: Optional[Environment] = None

    def __init__(self, output_type: Union[OutputType, str] = OutputType.MODERN):
        self.output_type = OutputType.parse(output_type)

    @classmethod
    def environment(cls) -> Environment:
        if cls._environment is None:
            cls._environment = create_environment()
        return cls._environment

    @staticmethod
    def _constants(model: VocabularyModel) -> List[Dict[str, Any]]:
        constants = []
        for entity in model.entities:
            constants.append({
                "constant": entity.constant_name,
                "name": entity.name,
                "iri": entity.iri,
                "role": entity.role.value,
                "deprecated": entity.deprecated,
            })
        return constants

    def build_context(self, model: VocabularyModel) -> Dict[str, Any]:
        """Template variables for a model."""
        return {
            "package": model.package,
            "class_name": model.class_name,
            "prefix": model.prefix,
            "namespace": model.namespace,
            "locator": model.locator,
            "timestamp": model.timestamp.isoformat(),
            "entities": self._constants(model),
            "generator": f"vocabgen {__version__}",
        }

    def render(self, model: VocabularyModel) -> str:
        """
        Render a vocabulary model.

        Args:
            model: Assembled vocabulary model

        Returns:
            Generated source text

        Raises:
            RenderError: If the template cannot be loaded or rendered
        """
        try:
            template = self.environment().get_template(self.output_type.template_name)
            text = template.render(**self.build_context(model))
        except TemplateError as e:
            logger.error(f"Failed to render {model.class_name} with {self.output_type}: {e}")
            raise RenderError(model.locator, str(e))
        logger.debug(
            f"Rendered {model.class_name} ({self.output_type}, {len(model.entities)} constants)"
        )
        return text
