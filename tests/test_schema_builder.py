import pytest

from swagger_gen.errors import UnresolvableTypeError
from swagger_gen.schema.builder import SchemaBuilder
from swagger_gen.schema.descriptor import TypeDescriptor


def _inline(descriptor):
    """Resolve nested types inline (no registry)."""
    return SchemaBuilder().build(descriptor, _inline)


class TestPrimitives:
    @pytest.mark.parametrize("primitive, expected", [
        ("int32", {"type": "integer", "format": "int32"}),
        ("int64", {"type": "integer", "format": "int64"}),
        ("string", {"type": "string"}),
        ("boolean", {"type": "boolean"}),
        ("date-time", {"type": "string", "format": "date-time"}),
        ("decimal", {"type": "number", "format": "double"}),
        ("uuid", {"type": "string", "format": "uuid"}),
    ])
    def test_primitive_mapping(self, primitive, expected):
        assert _inline(TypeDescriptor.of_primitive(primitive)) == expected

    def test_unknown_primitive_fails(self):
        with pytest.raises(UnresolvableTypeError) as exc:
            _inline(TypeDescriptor.of_primitive("int128"))
        assert exc.value.identity == "int128"

    def test_unknown_kind_fails(self):
        with pytest.raises(UnresolvableTypeError, match="unknown kind"):
            _inline(TypeDescriptor("union", "pkg.Either"))


class TestEnums:
    def test_string_enum_keeps_declared_order(self):
        descriptor = TypeDescriptor.of_enum("shop.ProductType", ["Book", "Album", "Film"])
        assert _inline(descriptor) == {"type": "string", "enum": ["Book", "Album", "Film"]}

    def test_integer_backed_enum(self):
        descriptor = TypeDescriptor.of_enum("shop.Priority", [2, 1, 0], enum_type="int32")
        assert _inline(descriptor) == {"type": "integer", "format": "int32", "enum": [2, 1, 0]}

    def test_enum_backed_by_non_integer_fails(self):
        descriptor = TypeDescriptor.of_enum("shop.Ratio", [0.5], enum_type="double")
        with pytest.raises(UnresolvableTypeError):
            _inline(descriptor)


class TestContainers:
    def test_array(self):
        descriptor = TypeDescriptor.of_array(TypeDescriptor.of_primitive("string"))
        assert _inline(descriptor) == {"type": "array", "items": {"type": "string"}}

    def test_dictionary(self):
        descriptor = TypeDescriptor.of_dictionary(TypeDescriptor.of_primitive("int64"))
        assert _inline(descriptor) == {
            "type": "object",
            "additionalProperties": {"type": "integer", "format": "int64"},
        }

    def test_nullable_unwraps(self):
        descriptor = TypeDescriptor.of_nullable(TypeDescriptor.of_primitive("int32"))
        assert _inline(descriptor) == {"type": "integer", "format": "int32"}

    def test_array_without_item_fails(self):
        with pytest.raises(UnresolvableTypeError, match="without an item type"):
            _inline(TypeDescriptor("array", "array[?]"))


class TestObjects:
    def test_required_lists_non_nullable_members_in_order(self):
        descriptor = (
            TypeDescriptor.of_object("shop.Product")
            .add_member("name", TypeDescriptor.of_primitive("string"))
            .add_member("description", TypeDescriptor.of_nullable(TypeDescriptor.of_primitive("string")))
            .add_member("id", TypeDescriptor.of_primitive("int32"))
        )
        schema = _inline(descriptor)
        assert list(schema["properties"]) == ["name", "description", "id"]
        assert schema["required"] == ["name", "id"]

    def test_required_omitted_when_everything_is_nullable(self):
        descriptor = TypeDescriptor.of_object("shop.Note").add_member(
            "text", TypeDescriptor.of_nullable(TypeDescriptor.of_primitive("string"))
        )
        assert _inline(descriptor) == {"type": "object", "properties": {"text": {"type": "string"}}}

    def test_descriptions(self):
        descriptor = TypeDescriptor.of_object("shop.Tag", description="A label").add_member(
            "name", TypeDescriptor.of_primitive("string"), description="Display name"
        )
        schema = _inline(descriptor)
        assert schema["description"] == "A label"
        assert schema["properties"]["name"] == {"type": "string", "description": "Display name"}

    def test_nested_types_go_through_the_callback(self):
        seen = []

        def resolve(descriptor):
            seen.append(descriptor.identity)
            return {"$ref": f"#/definitions/{descriptor.name}"}

        category = TypeDescriptor.of_object("shop.Category")
        product = TypeDescriptor.of_object("shop.Product").add_member("category", category)
        schema = SchemaBuilder().build(product, resolve)
        assert seen == ["shop.Category"]
        assert schema["properties"]["category"] == {"$ref": "#/definitions/Category"}
