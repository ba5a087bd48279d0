"""Describe Python annotations as TypeDescriptors.

Supports builtins, ``typing`` generics, Optional/``X | None``, Enum,
Literal, Annotated, dataclasses, pydantic models and plain annotated classes.
"""

import collections.abc
import dataclasses
import datetime
import decimal
import inspect
import logging
import types
import uuid
from enum import Enum
from typing import Any, Annotated, Literal, Union, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from swagger_gen.errors import UnresolvableTypeError
from swagger_gen.schema.descriptor import TypeDescriptor

logger = logging.getLogger(__name__)

_PRIMITIVES: dict[Any, str] = {
    bool: "boolean",
    int: "int32",
    float: "double",
    decimal.Decimal: "decimal",
    str: "string",
    bytes: "byte",
    datetime.datetime: "date-time",
    datetime.date: "date",
    uuid.UUID: "uuid",
    Any: "object",
    object: "object",
}

_SEQUENCE_TYPES = {
    list, tuple, set, frozenset,
    collections.abc.Sequence, collections.abc.MutableSequence,
    collections.abc.Set, collections.abc.MutableSet, collections.abc.Iterable,
}
_MAPPING_TYPES = {dict, collections.abc.Mapping, collections.abc.MutableMapping}


def type_identity(tp: type) -> str:
    return f"{tp.__module__}.{tp.__qualname__}"


def _is_int_values(values: list) -> bool:
    return bool(values) and all(isinstance(v, int) and not isinstance(v, bool) for v in values)


def _class_doc(tp: type) -> str | None:
    doc = tp.__dict__.get("__doc__")
    # dataclasses generate a signature docstring when none is written
    if not doc or (dataclasses.is_dataclass(tp) and doc.startswith(f"{tp.__name__}(")):
        return None
    return inspect.cleandoc(doc)


class TypeIntrospector:
    """Converts annotations into descriptors, sharing one descriptor per class.

    Class descriptors are registered before their members are described, so
    self-referencing and mutually referencing classes produce cyclic graphs.
    """

    def __init__(self):
        self._seen: dict[type, TypeDescriptor] = {}

    def describe(self, tp: Any) -> TypeDescriptor:
        origin = get_origin(tp)
        args = get_args(tp)

        if origin is Annotated:
            return self.describe(args[0])
        if origin is Union or origin is types.UnionType:
            return self._describe_union(tp, args)
        if origin is Literal:
            return self._describe_literal(tp, args)
        if origin in _SEQUENCE_TYPES or tp in _SEQUENCE_TYPES:
            return self._describe_sequence(origin, args)
        if origin in _MAPPING_TYPES or tp in _MAPPING_TYPES:
            return self._describe_mapping(tp, args)

        if tp in _PRIMITIVES:
            return TypeDescriptor.of_primitive(_PRIMITIVES[tp])
        if tp in self._seen:
            return self._seen[tp]

        if inspect.isclass(tp):
            if issubclass(tp, Enum):
                return self._describe_enum(tp)
            if issubclass(tp, BaseModel):
                members = [(field.alias or name, field.annotation) for name, field in tp.model_fields.items()]
                return self._describe_class(tp, members)
            if dataclasses.is_dataclass(tp):
                hints = get_type_hints(tp, include_extras=True)
                return self._describe_class(tp, [(f.name, hints[f.name]) for f in dataclasses.fields(tp)])
            if getattr(tp, "__annotations__", None):
                hints = get_type_hints(tp, include_extras=True)
                return self._describe_class(tp, [(n, h) for n, h in hints.items() if not n.startswith("_")])

        raise UnresolvableTypeError(repr(tp), "no mapping for this annotation")

    def _describe_union(self, tp: Any, args: tuple) -> TypeDescriptor:
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1 and len(args) == 2:
            return TypeDescriptor.of_nullable(self.describe(non_none[0]))
        raise UnresolvableTypeError(repr(tp), "unions of several types are not supported")

    def _describe_literal(self, tp: Any, args: tuple) -> TypeDescriptor:
        values = list(args)
        if _is_int_values(values):
            return TypeDescriptor.of_enum(repr(tp), values, enum_type="int32", name="Literal")
        return TypeDescriptor.of_enum(repr(tp), [str(v) for v in values], name="Literal")

    def _describe_sequence(self, origin: Any, args: tuple) -> TypeDescriptor:
        item = args[0] if args else Any
        # heterogeneous fixed-size tuples have no single item type
        if origin is tuple and len(args) > 1 and args[1] is not Ellipsis and len(set(args)) > 1:
            item = Any
        return TypeDescriptor.of_array(self.describe(item))

    def _describe_mapping(self, tp: Any, args: tuple) -> TypeDescriptor:
        key, value = args if len(args) == 2 else (str, Any)
        if key is not str:
            raise UnresolvableTypeError(repr(tp), "dictionary keys must be strings")
        return TypeDescriptor.of_dictionary(self.describe(value))

    def _describe_enum(self, tp: type[Enum]) -> TypeDescriptor:
        values = [member.value for member in tp]
        if _is_int_values(values):
            descriptor = TypeDescriptor.of_enum(type_identity(tp), values, enum_type="int32", name=tp.__name__)
        else:
            names = [member.value if isinstance(member.value, str) else member.name for member in tp]
            descriptor = TypeDescriptor.of_enum(type_identity(tp), names, name=tp.__name__)
        self._seen[tp] = descriptor
        return descriptor

    def _describe_class(self, tp: type, members: list[tuple[str, Any]]) -> TypeDescriptor:
        descriptor = TypeDescriptor.of_object(type_identity(tp), name=tp.__name__, description=_class_doc(tp))
        self._seen[tp] = descriptor
        for name, annotation in members:
            descriptor.add_member(name, self.describe(annotation))
        logger.debug("Described %s with %d members", descriptor.identity, len(descriptor.members))
        return descriptor


def describe(tp: Any) -> TypeDescriptor:
    """Describe a single annotation with a fresh introspector."""
    return TypeIntrospector().describe(tp)
