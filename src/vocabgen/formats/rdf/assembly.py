"""
Model assembly.

Packages the resolved vocabulary metadata and entity records into the
immutable VocabularyModel handed to the renderer.
"""

import logging
import re
from datetime import datetime
from typing import Iterable, Optional

from vocabgen.core.errors import AssemblyError
from vocabgen.shared.models import EntityRecord, VocabularyModel, VocabularySource

logger = logging.getLogger(__name__)

_NON_IDENTIFIER = re.compile(r"[^0-9A-Za-z_]")


class ModelAssembler:
    """Builds VocabularyModels for a target package."""

    def __init__(self, package: str):
        self.package = package

    @staticmethod
    def artifact_name(prefix: str) -> str:
        """
        Derive the generated artifact name from a vocabulary prefix.

        The prefix is upper-cased and characters that cannot appear in an
        identifier are replaced by '_' ('foaf' -> 'FOAF', 'dc-terms' -> 'DC_TERMS').
        """
        name = _NON_IDENTIFIER.sub("_", prefix.strip()).upper()
        if name and name[0].isdigit():
            name = "_" + name
        return name

    def assemble(
        self,
        source: VocabularySource,
        entities: Iterable[EntityRecord],
        timestamp: Optional[datetime] = None,
    ) -> VocabularyModel:
        """
        Assemble the renderer input for one vocabulary.

        Args:
            source: Vocabulary reference with prefix/namespace resolved
            entities: Resolved entity records in output order
            timestamp: Generation time (defaults to now)

        Returns:
            VocabularyModel

        Raises:
            AssemblyError: If no prefix was supplied or found in the document
        """
        if not source.prefix or not self.artifact_name(source.prefix):
            raise AssemblyError(
                source.url,
                "no prefix configured and none could be inferred from the document "
                "(set 'prefix' for this vocabulary)",
            )
        if source.namespace is None:
            logger.warning(f"No namespace configured or found for {source.url}")

        kwargs = {}
        if timestamp is not None:
            kwargs["timestamp"] = timestamp
        model = VocabularyModel(
            locator=source.url,
            prefix=source.prefix,
            namespace=source.namespace,
            class_name=self.artifact_name(source.prefix),
            package=self.package,
            entities=tuple(entities),
            **kwargs,
        )
        logger.debug(f"Assembled {model.class_name} with {len(model.entities)} entities")
        return model
