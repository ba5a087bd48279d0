import pytest

from swagger_gen.config import RequestContext, SwaggerConfig
from swagger_gen.document.actions import ApiOperationDescriptor
from swagger_gen.document.assembler import DocumentAssembler
from swagger_gen.document.models import Contact, License
from swagger_gen.document.operation import OperationBuilder
from swagger_gen.document.paths import normalize_path, template_parameters
from swagger_gen.errors import ConflictError, DuplicateOperationIdError
from swagger_gen.schema.registry import SchemaRegistry


def _action(method, path, name, group="Items"):
    return ApiOperationDescriptor(method=method, path=path, name=name, group=group)


def _assemble(actions, config=None, request=None):
    config = config or SwaggerConfig(version="1.0", title="Test API")
    registry = SchemaRegistry()
    builder = OperationBuilder(registry)
    pairs = [(a, builder.build(a)) for a in actions]
    return DocumentAssembler(config).assemble(pairs, registry, request)


class TestPaths:
    @pytest.mark.parametrize("template, expected", [
        ("products", "/products"),
        ("/products/", "/products"),
        ("", "/"),
        ("/", "/"),
        ("api//v1/products", "/api/v1/products"),
        ("products/{id:int}", "/products/{id}"),
        ("products/{id?}", "/products/{id}"),
        ("files/{*path}", "/files/{path}"),
        ("products?expand=true", "/products"),
    ])
    def test_normalize_path(self, template, expected):
        assert normalize_path(template) == expected

    def test_template_parameters(self):
        assert template_parameters("/{apiVersion}/stores/{id:int}/items/{item?}") == ["apiVersion", "id", "item"]


class TestGrouping:
    def test_methods_are_grouped_per_path_in_swagger_order(self):
        doc = _assemble([
            _action("DELETE", "items/{id}", "Delete"),
            _action("GET", "items", "GetAll"),
            _action("PUT", "items/{id}", "Update"),
            _action("POST", "items", "Create"),
        ])
        assert list(doc.paths) == ["/items/{id}", "/items"]
        assert list(doc.paths["/items/{id}"]) == ["put", "delete"]
        assert list(doc.paths["/items"]) == ["get", "post"]

    def test_equivalent_templates_share_a_path(self):
        doc = _assemble([_action("GET", "items/{id:int}", "Get"), _action("DELETE", "/items/{id}/", "Delete")])
        assert list(doc.paths) == ["/items/{id}"]


class TestConflicts:
    def test_distinct_actions_on_same_path_and_method_fail(self):
        with pytest.raises(ConflictError) as exc:
            _assemble([_action("GET", "items", "GetAll"), _action("GET", "items", "GetAllByKeyword")])
        assert exc.value.path == "/items"
        assert exc.value.method == "get"
        assert exc.value.first == "Items.GetAll"
        assert exc.value.second == "Items.GetAllByKeyword"

    def test_same_action_twice_is_idempotent(self):
        doc = _assemble([_action("GET", "items", "GetAll"), _action("GET", "items", "GetAll")])
        assert doc.paths["/items"]["get"].operation_id == "Items.GetAll"

    def test_duplicate_operation_id_on_another_path_is_tolerated(self, caplog):
        doc = _assemble([_action("GET", "items", "GetAll"), _action("GET", "{apiVersion}/items", "GetAll")])
        assert len(doc.paths) == 2
        assert "is used by both" in caplog.text

    def test_duplicate_operation_id_fails_when_uniqueness_is_enforced(self):
        config = SwaggerConfig(version="1.0", title="Test API", unique_operation_ids=True)
        with pytest.raises(DuplicateOperationIdError) as exc:
            _assemble([_action("GET", "items", "GetAll"), _action("GET", "{apiVersion}/items", "GetAll")], config)
        assert exc.value.first == ("/items", "get")
        assert exc.value.second == ("/{apiVersion}/items", "get")


class TestDocument:
    def test_empty_action_list(self):
        doc = _assemble([]).to_dict()
        assert doc == {
            "swagger": "2.0",
            "info": {"version": "1.0", "title": "Test API"},
            "host": "localhost",
            "basePath": "/",
            "schemes": ["http"],
            "paths": {},
            "definitions": {},
        }

    def test_host_and_scheme_come_from_the_request(self):
        doc = _assemble([], request=RequestContext.from_url("https://tempuri.org:8443/swagger/docs/1.0"))
        assert doc.host == "tempuri.org:8443"
        assert doc.schemes == ["https"]

    def test_host_resolver_overrides_request(self):
        config = SwaggerConfig(version="1.0", title="Test API", host_resolver=lambda request: "foobar.com")
        assert _assemble([], config).host == "foobar.com"

    def test_configured_base_path_and_schemes(self):
        config = SwaggerConfig(version="1.0", title="Test API", base_path="/api", schemes=["https", "http"])
        doc = _assemble([], config)
        assert doc.base_path == "/api"
        assert doc.schemes == ["https", "http"]

    def test_optional_info_fields(self):
        config = SwaggerConfig(
            version="1.0",
            title="Test API",
            description="A test API",
            terms_of_service="Test terms",
            contact=Contact(name="Joe Test", url="http://tempuri.org/contact", email="joe.test@tempuri.org"),
            license=License(name="Test License", url="http://tempuri.org/license"),
        )
        assert _assemble([], config).to_dict()["info"] == {
            "version": "1.0",
            "title": "Test API",
            "description": "A test API",
            "termsOfService": "Test terms",
            "contact": {"name": "Joe Test", "url": "http://tempuri.org/contact", "email": "joe.test@tempuri.org"},
            "license": {"name": "Test License", "url": "http://tempuri.org/license"},
        }
