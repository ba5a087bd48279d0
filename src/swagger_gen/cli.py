"""CLI entry point for swagger-gen."""

import fnmatch
import logging
from pathlib import Path

import click

from swagger_gen.config import DEFAULT_URL, RequestContext, SwaggerConfig, config_from_dict, load_config
from swagger_gen.document.actions import ApiOperationDescriptor
from swagger_gen.document.paths import normalize_path
from swagger_gen.errors import SwaggerGenError
from swagger_gen.generator import SwaggerGenerator
from swagger_gen.manifest import parse_manifest


def _filter_actions(actions: list[ApiOperationDescriptor], patterns: tuple[str, ...]) -> list[ApiOperationDescriptor]:
    """Keep actions matching any of "METHOD /path" or "/path" (glob) patterns."""
    if not patterns:
        return actions
    selected = []
    for action in actions:
        path = normalize_path(action.path)
        for pattern in patterns:
            method, _, path_pattern = pattern.strip().rpartition(" ")
            if method and method.upper() != action.method:
                continue
            if fnmatch.fnmatch(path, path_pattern):
                selected.append(action)
                break
    return selected


def _build_config(config_path: Path | None, version: str | None, title: str | None) -> SwaggerConfig:
    if config_path is not None:
        return load_config(config_path, version=version, title=title)
    return config_from_dict({"version": version or "v1", "title": title or "API"})


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """swagger-gen: build Swagger 2.0 documents from action manifests."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("manifest_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the document.")
@click.option("-c", "--config", "config_path", default=None, type=click.Path(exists=True, path_type=Path), help="YAML configuration file.")
@click.option("--url", default=DEFAULT_URL, help="URL the document is served from; sets the default host and scheme.")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), help="Output format.")
@click.option("--api-version", "version", default=None, help="API version (overrides the config file).")
@click.option("--title", default=None, help="API title (overrides the config file).")
@click.option("--only", multiple=True, help='Only include matching actions, e.g. "GET /products" or "/customers/*".')
def build(manifest_path: Path, output: Path, config_path: Path | None, url: str, fmt: str,
          version: str | None, title: str | None, only: tuple[str, ...]):
    """Generate a Swagger document from an action manifest."""
    click.echo(f"Parsing {manifest_path}...")
    try:
        actions = _filter_actions(parse_manifest(manifest_path), only)
        click.echo(f"Found {len(actions)} actions.")

        config = _build_config(config_path, version, title)
        document = SwaggerGenerator(config).generate(actions, RequestContext.from_url(url))
    except SwaggerGenError as e:
        raise click.ClickException(str(e)) from e

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document.to_yaml() if fmt == "yaml" else document.to_json(), encoding="utf-8")
    click.echo(f"Document with {len(document.paths)} paths and {len(document.definitions)} definitions saved to {output}")


@main.command()
@click.argument("manifest_path", type=click.Path(exists=True, path_type=Path))
@click.option("--only", multiple=True, help="Only list matching actions.")
def routes(manifest_path: Path, only: tuple[str, ...]):
    """List the operations a manifest would produce."""
    try:
        actions = _filter_actions(parse_manifest(manifest_path), only)
    except SwaggerGenError as e:
        raise click.ClickException(str(e)) from e
    for action in actions:
        marker = " (deprecated)" if action.deprecated else ""
        click.echo(f"{action.method:7} {normalize_path(action.path)}  {action.identity}{marker}")
