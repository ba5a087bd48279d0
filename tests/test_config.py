from pathlib import Path

import pytest

from swagger_gen.config import RequestContext, config_from_dict, import_string, load_config
from swagger_gen.errors import ConfigError
from swagger_gen.generator import SwaggerGenerator
from swagger_gen.manifest import parse_manifest

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadConfig:
    def test_info_fields(self):
        config = load_config(FIXTURES / "config.yaml")
        assert config.version == "1.0"
        assert config.title == "Test API"
        assert config.contact.email == "joe.test@tempuri.org"
        assert config.license.name == "Test License"

    def test_filters_are_imported_in_order(self):
        config = load_config(FIXTURES / "config.yaml")
        assert type(config.document_filters[0]).__name__ == "ApplyVendorExtensions"
        assert config.operation_filters[0].__name__ == "add_default_response"

    def test_overrides_win(self):
        config = load_config(FIXTURES / "config.yaml", version="2.0", title=None)
        assert config.version == "2.0"
        assert config.title == "Test API"

    def test_configured_filters_apply(self):
        config = load_config(FIXTURES / "config.yaml")
        doc = SwaggerGenerator(config).generate(parse_manifest(FIXTURES / "shop.yaml")).to_dict()
        assert doc["x-foo"] == "bar"
        assert doc["paths"]["/products"]["get"]["responses"]["default"] == {"description": "Unexpected error"}
        assert doc["paths"]["/products"]["post"]["responses"]["default"] == {"description": "Unexpected error"}

    def test_not_a_mapping(self, tmp_path):
        f = tmp_path / "config.yaml"
        f.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            load_config(f)

    def test_missing_title(self, tmp_path):
        f = tmp_path / "config.yaml"
        f.write_text("version: '1.0'\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(f)


class TestConfigFromDict:
    def test_fixed_host(self):
        config = config_from_dict({"version": "1", "title": "t", "host": "foobar.com"})
        assert config.host_resolver(RequestContext()) == "foobar.com"

    def test_non_callable_filter(self):
        with pytest.raises(ConfigError, match="not callable"):
            config_from_dict({"version": "1", "title": "t", "document_filters": ["swagger_gen.document.models:SWAGGER_VERSION"]})


class TestImportString:
    def test_colon_reference(self):
        assert import_string("swagger_gen.document.models:SwaggerDocument").__name__ == "SwaggerDocument"

    def test_dotted_reference(self):
        assert import_string("swagger_gen.config.load_config") is load_config

    def test_missing_module(self):
        with pytest.raises(ConfigError, match="Cannot import module"):
            import_string("swagger_gen.nowhere:thing")

    def test_missing_attribute(self):
        with pytest.raises(ConfigError, match="has no attribute"):
            import_string("swagger_gen.config:nothing")

    def test_malformed_reference(self):
        with pytest.raises(ConfigError, match="Invalid reference"):
            import_string("nodots")


class TestRequestContext:
    def test_from_url(self):
        request = RequestContext.from_url("https://api.example.com:8443/docs")
        assert request.scheme == "https"
        assert request.host == "api.example.com:8443"

    def test_relative_url_rejected(self):
        with pytest.raises(ConfigError):
            RequestContext.from_url("/swagger/docs/1.0")
