"""Type descriptors: a neutral description of the data types an API exchanges.

Descriptors are plain objects rather than pydantic models because object
types may reference themselves (directly or through other types), and the
resulting graphs must not be copied or compared structurally.
"""

from enum import Enum


class TypeKind(str, Enum):
    PRIMITIVE = "primitive"
    ENUM = "enum"
    ARRAY = "array"
    DICTIONARY = "dictionary"
    OBJECT = "object"
    NULLABLE = "nullable"


class Member:
    """A named member of an object type."""

    def __init__(self, name: str, type: "TypeDescriptor", description: str | None = None):
        self.name = name
        self.type = type
        self.description = description

    def __repr__(self) -> str:
        return f"Member({self.name!r}, {self.type.identity!r})"


class TypeDescriptor:
    """Describes one data type.

    ``identity`` is the stable key used for caching and reference naming.
    ``name`` is the short, human readable name and defaults to the last
    dotted segment of the identity.
    """

    def __init__(
        self,
        kind: str,
        identity: str,
        name: str | None = None,
        *,
        primitive: str | None = None,
        item: "TypeDescriptor | None" = None,
        members: list[Member] | None = None,
        enum_values: list | None = None,
        enum_type: str = "string",
        description: str | None = None,
    ):
        self.kind = kind
        self.identity = identity
        self.name = name or identity.rsplit(".", 1)[-1]
        self.primitive = primitive
        self.item = item
        self.members = list(members or [])
        self.enum_values = list(enum_values or [])
        self.enum_type = enum_type
        self.description = description

    def __repr__(self) -> str:
        return f"TypeDescriptor({self.kind!r}, {self.identity!r})"

    @property
    def is_nullable(self) -> bool:
        return self.kind == TypeKind.NULLABLE

    def add_member(self, name: str, type: "TypeDescriptor", description: str | None = None) -> "TypeDescriptor":
        """Append a member; returns self so cyclic graphs can be built fluently."""
        self.members.append(Member(name, type, description))
        return self

    @classmethod
    def of_primitive(cls, primitive: str) -> "TypeDescriptor":
        return cls(TypeKind.PRIMITIVE, primitive, primitive=primitive)

    @classmethod
    def of_array(cls, item: "TypeDescriptor") -> "TypeDescriptor":
        return cls(TypeKind.ARRAY, f"array[{item.identity}]", item=item)

    @classmethod
    def of_dictionary(cls, value: "TypeDescriptor") -> "TypeDescriptor":
        return cls(TypeKind.DICTIONARY, f"dict[{value.identity}]", item=value)

    @classmethod
    def of_nullable(cls, inner: "TypeDescriptor") -> "TypeDescriptor":
        return cls(TypeKind.NULLABLE, f"nullable[{inner.identity}]", item=inner)

    @classmethod
    def of_enum(
        cls,
        identity: str,
        values: list,
        enum_type: str = "string",
        name: str | None = None,
    ) -> "TypeDescriptor":
        return cls(TypeKind.ENUM, identity, name, enum_values=values, enum_type=enum_type)

    @classmethod
    def of_object(
        cls,
        identity: str,
        members: list[Member] | None = None,
        name: str | None = None,
        description: str | None = None,
    ) -> "TypeDescriptor":
        return cls(TypeKind.OBJECT, identity, name, members=members, description=description)
