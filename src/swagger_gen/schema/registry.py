"""Schema registry: named, de-duplicated definitions for object types.

A registry belongs to one generation run. Definition names and ``$ref``
targets are only meaningful inside the document produced by that run.
"""

import logging
import re
import threading
from types import MappingProxyType
from typing import Mapping

from swagger_gen.errors import NamingCollisionError
from swagger_gen.schema.builder import SchemaBuilder
from swagger_gen.schema.descriptor import TypeDescriptor, TypeKind

logger = logging.getLogger(__name__)

REF_PREFIX = "#/definitions/"
MAX_NAME_ATTEMPTS = 1000

_INVALID_NAME_CHARS = re.compile(r"[^A-Za-z0-9_.\-]")


def ref_to(name: str) -> dict:
    return {"$ref": f"{REF_PREFIX}{name}"}


class SchemaRegistry:
    """Resolves type descriptors to schemas, flattening objects into definitions."""

    def __init__(self, builder: SchemaBuilder | None = None):
        self.builder = builder or SchemaBuilder()
        self._definitions: dict[str, dict] = {}
        self._names_by_identity: dict[str, str] = {}
        self._identities_by_name: dict[str, str] = {}
        self._lock = threading.RLock()

    @property
    def definitions(self) -> Mapping[str, dict]:
        return MappingProxyType(self._definitions)

    def ref_name(self, descriptor: TypeDescriptor) -> str | None:
        """Return the definition name reserved for an object type, if any."""
        return self._names_by_identity.get(descriptor.identity)

    def resolve(self, descriptor: TypeDescriptor) -> dict:
        """Return the schema for a type; object types come back as ``$ref``."""
        if descriptor.kind != TypeKind.OBJECT:
            return self.builder.build(descriptor, self.resolve)

        with self._lock:
            name = self._names_by_identity.get(descriptor.identity)
            if name is not None:
                return ref_to(name)

            # Reserve first so members referring back to this type get a ref
            checkpoint = len(self._names_by_identity)
            name = self._reserve_name(descriptor)
            logger.debug("Building definition '%s' for %s", name, descriptor.identity)
            try:
                self._definitions[name] = self.builder.build(descriptor, self.resolve)
            except Exception:
                self._release_names(checkpoint)
                raise
            return ref_to(name)

    def _release_names(self, checkpoint: int) -> None:
        # Drops every name reserved since the checkpoint, including definitions
        # that already refer to the type whose build failed
        for identity in list(self._names_by_identity)[checkpoint:]:
            name = self._names_by_identity.pop(identity)
            del self._identities_by_name[name]
            self._definitions.pop(name, None)
            logger.debug("Released definition name '%s' for %s", name, identity)

    def _reserve_name(self, descriptor: TypeDescriptor) -> str:
        base = _INVALID_NAME_CHARS.sub("", descriptor.name) or "Model"
        candidate = base
        for attempt in range(2, MAX_NAME_ATTEMPTS + 2):
            if candidate not in self._identities_by_name:
                break
            candidate = f"{base}{attempt}"
        else:
            raise NamingCollisionError(base, MAX_NAME_ATTEMPTS)

        if candidate != base:
            logger.debug(
                "Definition name '%s' is taken by %s, using '%s' for %s",
                base, self._identities_by_name[base], candidate, descriptor.identity,
            )
        self._names_by_identity[descriptor.identity] = candidate
        self._identities_by_name[candidate] = descriptor.identity
        return candidate
