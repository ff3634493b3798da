"""
Vocabulary data types.

This module defines the data structures that flow through the generator:
the vocabulary reference supplied by the caller, the entity records produced
by the identifier resolver, and the assembled model handed to the renderer.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from vocabgen.constants import OutputConfig


def constant_name_for(name: str) -> str:
    """
    Source-code constant emitted for an entity name.

    Non-identifier characters become '_', a leading digit gets a '_'
    prefix, and names of the members every template declares get a '_'
    suffix. Two entities with the same constant name cannot both be emitted.

    Example:
        >>> constant_name_for("foo-bar"), constant_name_for("ns")
        ('FOO_BAR', 'NS_')
    """
    cleaned = "".join(c if c.isalnum() or c == "_" else "_" for c in name)
    if cleaned and cleaned[0].isdigit():
        cleaned = "_" + cleaned
    constant = cleaned.upper()
    if constant in OutputConfig.RESERVED_CONSTANTS:
        constant += "_"
    return constant


class EntityRole(str, Enum):
    """Role of a vocabulary term in the generated output."""
    CLASS = "class"
    PROPERTY = "property"

    def __str__(self) -> str:
        return self.value


class OutputType(str, Enum):
    """
    Rendering variants for generated sources.

    MODERN is the default and outputs classes using RDF4J 2.x, LEGACY
    targets Sesame 2.x, STRINGS emits plain String constants for use with
    annotations.
    """
    MODERN = "MODERN"
    LEGACY = "LEGACY"
    STRINGS = "STRINGS"

    def __str__(self) -> str:
        return self.value

    @property
    def template_name(self) -> str:
        return f"{self.value.lower()}.java.j2"

    @property
    def file_extension(self) -> str:
        return ".java"

    @classmethod
    def parse(cls, value: Any) -> "OutputType":
        """Look up an output type by (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            choices = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown output type '{value}'. Options are {choices}")


@dataclass(frozen=True)
class VocabularySource:
    """
    Reference to a vocabulary document.

    ``prefix`` and ``namespace`` may be supplied by the caller or left unset
    and filled in from the document itself. Once set they never change:
    :meth:`resolve` only fills fields that are still ``None`` and returns a
    new instance.

    Attributes:
        url: Locator of the vocabulary document (URL or file path).
        prefix: Short alias used to name the generated artifact.
        namespace: Common IRI stem of the vocabulary terms.

    Example:
        >>> src = VocabularySource("http://xmlns.com/foaf/0.1/")
        >>> src.resolve(prefix="foaf").resolve(prefix="other").prefix
        'foaf'
    """
    url: str
    prefix: Optional[str] = None
    namespace: Optional[str] = None

    def resolve(
        self,
        prefix: Optional[str] = None,
        namespace: Optional[str] = None,
    ) -> "VocabularySource":
        """Return a copy with unset fields filled (first write wins)."""
        updates: Dict[str, str] = {}
        if self.prefix is None and prefix:
            updates["prefix"] = prefix
        if self.namespace is None and namespace:
            updates["namespace"] = namespace
        if not updates:
            return self
        return replace(self, **updates)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VocabularySource":
        """Create a VocabularySource from a configuration entry."""
        if not isinstance(data, dict):
            raise ValueError(f"Vocabulary entry must be an object, got {type(data).__name__}")
        url = data.get("url") or data.get("locator")
        if not url:
            raise ValueError("Vocabulary entry is missing 'url'")
        return cls(
            url=str(url),
            prefix=data.get("prefix") or None,
            namespace=data.get("namespace") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "prefix": self.prefix, "namespace": self.namespace}


@dataclass(frozen=True)
class EntityRecord:
    """
    A single named vocabulary term ready for rendering.

    Attributes:
        iri: Absolute identifier of the term.
        name: Output name (local name, or ``has_<local name>`` for properties
            whose local name matches a class).
        role: Whether the term was classified as a class or a property.
        deprecated: True when the vocabulary marks the term owl:deprecated
            and deprecated terms are included.

    Example:
        >>> rec = EntityRecord("http://example.org/given", "has_given", EntityRole.PROPERTY)
        >>> rec.constant_name
        'HAS_GIVEN'
    """
    iri: str
    name: str
    role: EntityRole
    deprecated: bool = False

    @property
    def constant_name(self) -> str:
        return constant_name_for(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "iri": self.iri,
            "name": self.name,
            "role": self.role.value,
            "deprecated": self.deprecated,
        }


@dataclass(frozen=True)
class VocabularyModel:
    """
    Everything the renderer needs for one vocabulary.

    Attributes:
        locator: Locator the vocabulary was loaded from.
        prefix: Resolved vocabulary prefix.
        namespace: Resolved vocabulary namespace (may be None).
        class_name: Artifact name derived from the prefix (upper-cased).
        package: Target package of the generated source.
        entities: Ordered entity records (classes first, then properties).
        timestamp: Generation time.
    """
    locator: str
    prefix: str
    namespace: Optional[str]
    class_name: str
    package: str
    entities: Tuple[EntityRecord, ...] = ()
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def classes(self) -> Tuple[EntityRecord, ...]:
        return tuple(e for e in self.entities if e.role is EntityRole.CLASS)

    @property
    def properties(self) -> Tuple[EntityRecord, ...]:
        return tuple(e for e in self.entities if e.role is EntityRole.PROPERTY)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "locator": self.locator,
            "prefix": self.prefix,
            "namespace": self.namespace,
            "class": self.class_name,
            "package": self.package,
            "timestamp": self.timestamp.isoformat(),
            "entities": [e.to_dict() for e in self.entities],
        }
