"""
Identifier Resolver Module

Turns the class and property identifiers collected by the classifier into
name-safe EntityRecords:

- deprecated terms are removed, or kept and flagged, depending on
  ``include_deprecated``
- a property whose local name matches a class name (ignoring case) is
  renamed to ``has_<local name>``
- a property whose constant name clashes with an earlier record is handed
  to the configured clash policy

Names clash when they map to the same source-code constant
(``constant_name_for``), which covers case differences as well as
``foo-bar`` / ``foo_bar``.

Clash policies are plain functions ``(candidate, iri, taken) -> name or None``
where ``taken`` holds the constant names emitted so far. Returning None
drops the property.
"""

import logging
from typing import Callable, Collection, Dict, Iterable, List, Optional, Set, Tuple

from rdflib import URIRef

from vocabgen.constants import OutputConfig, VocabTerms
from vocabgen.core.errors import NameClashError
from vocabgen.shared.models import EntityRecord, EntityRole, constant_name_for
from .classifier import ClassificationResult
from .uri_utils import URIUtils

logger = logging.getLogger(__name__)

ClashPolicy = Callable[[str, URIRef, Set[str]], Optional[str]]


# =============================================================================
# Clash policies
# =============================================================================

def drop_on_clash(candidate: str, iri: URIRef, taken: Set[str]) -> Optional[str]:
    """Silently drop the clashing property (e.g. foaf:givenName vs foaf:givenname)."""
    logger.debug(f"Dropping {iri}: name '{candidate}' already taken")
    return None


def suffix_on_clash(candidate: str, iri: URIRef, taken: Set[str]) -> Optional[str]:
    """Rename the clashing property to ``<candidate>_2``, ``<candidate>_3``, ..."""
    n = 2
    while constant_name_for(f"{candidate}_{n}") in taken:
        n += 1
    renamed = f"{candidate}_{n}"
    logger.debug(f"Renaming {iri} to '{renamed}': name '{candidate}' already taken")
    return renamed


def raise_on_clash(candidate: str, iri: URIRef, taken: Set[str]) -> Optional[str]:
    """Refuse to continue on a clash."""
    raise NameClashError(candidate, str(iri))


CLASH_POLICIES: Dict[str, ClashPolicy] = {
    "drop": drop_on_clash,
    "suffix": suffix_on_clash,
    "error": raise_on_clash,
}


def get_clash_policy(name: str) -> ClashPolicy:
    """
    Look up a clash policy by name.

    Raises:
        ValueError: If the name is unknown
    """
    try:
        return CLASH_POLICIES[name.strip().lower()]
    except (KeyError, AttributeError):
        raise ValueError(
            f"Unknown name clash policy '{name}'. Options are {', '.join(CLASH_POLICIES)}"
        )


# =============================================================================
# Resolver
# =============================================================================

class IdentifierResolver:
    """
    Resolves classified identifiers into an ordered list of EntityRecords.

    Output order: classes in discovery order, then surviving properties in
    discovery order. The result depends only on the inputs and the flags.

    Example:
        resolver = IdentifierResolver()
        records = resolver.resolve(result.classes, result.properties, result.deprecated)
    """

    def __init__(self, clash_policy: object = OutputConfig.DEFAULT_CLASH_POLICY):
        """
        Initialize the resolver.

        Args:
            clash_policy: Policy name ('drop', 'suffix', 'error') or a
                ClashPolicy callable
        """
        if callable(clash_policy):
            self.clash_policy: ClashPolicy = clash_policy
        else:
            self.clash_policy = get_clash_policy(str(clash_policy))

    @staticmethod
    def _local_name(iri: URIRef) -> str:
        return URIUtils.local_name(iri)

    def resolve(
        self,
        classes: Iterable[URIRef],
        properties: Iterable[URIRef],
        deprecated: Collection[URIRef] = (),
        include_deprecated: bool = False,
    ) -> Tuple[EntityRecord, ...]:
        """
        Resolve identifiers into EntityRecords.

        Args:
            classes: Class identifiers in discovery order
            properties: Property identifiers in discovery order
            deprecated: Identifiers flagged owl:deprecated
            include_deprecated: Keep deprecated terms (flagged) instead of
                removing them

        Returns:
            Tuple of EntityRecords with no two properties sharing a constant name

        Raises:
            NameClashError: Only when the 'error' clash policy is active
        """
        deprecated_set = set(deprecated)
        if include_deprecated:
            class_ids = list(classes)
            property_ids = list(properties)
        else:
            class_ids = [c for c in classes if c not in deprecated_set]
            property_ids = [p for p in properties if p not in deprecated_set]

        records: List[EntityRecord] = []
        taken: Set[str] = set()
        class_names: Set[str] = set()

        for iri in class_ids:
            name = self._local_name(iri)
            if not name:
                logger.warning(f"Skipping class {iri}: empty local name")
                continue
            key = constant_name_for(name)
            if key in taken:
                logger.warning(
                    f"Class name '{name}' ({iri}) maps to the same constant {key} as another class; "
                    f"both are kept"
                )
            taken.add(key)
            class_names.add(name.lower())
            records.append(EntityRecord(
                iri=str(iri),
                name=name,
                role=EntityRole.CLASS,
                deprecated=include_deprecated and iri in deprecated_set,
            ))

        dropped = 0
        for iri in property_ids:
            local = self._local_name(iri)
            if not local:
                logger.warning(f"Skipping property {iri}: empty local name")
                continue
            candidate = f"{VocabTerms.HAS_PREFIX}{local}" if local.lower() in class_names else local
            if constant_name_for(candidate) in taken:
                resolved = self.clash_policy(candidate, iri, taken)
                if resolved is None:
                    dropped += 1
                    continue
                candidate = resolved
            taken.add(constant_name_for(candidate))
            records.append(EntityRecord(
                iri=str(iri),
                name=candidate,
                role=EntityRole.PROPERTY,
                deprecated=include_deprecated and iri in deprecated_set,
            ))

        logger.debug(
            f"Resolved {len(records)} entities "
            f"({len(class_ids)} classes, {len(property_ids)} properties, {dropped} dropped)"
        )
        return tuple(records)

    def resolve_result(
        self,
        result: ClassificationResult,
        include_deprecated: bool = False,
    ) -> Tuple[EntityRecord, ...]:
        """Resolve the sets of a ClassificationResult."""
        return self.resolve(
            result.classes,
            result.properties,
            result.deprecated,
            include_deprecated=include_deprecated,
        )
