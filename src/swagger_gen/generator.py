"""Swagger document generator: one call, one run, one fresh schema registry."""

import logging
from typing import Iterable

from swagger_gen.config import RequestContext, SwaggerConfig
from swagger_gen.document.actions import ApiOperationDescriptor
from swagger_gen.document.assembler import DocumentAssembler
from swagger_gen.document.filters import FilterPipeline
from swagger_gen.document.models import SwaggerDocument
from swagger_gen.document.operation import OperationBuilder
from swagger_gen.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)


class SwaggerGenerator:
    """Generates Swagger 2.0 documents from discovered actions."""

    def __init__(self, config: SwaggerConfig):
        self.config = config
        self.pipeline = FilterPipeline(config.document_filters, config.operation_filters)
        self.assembler = DocumentAssembler(config)

    def generate(
        self,
        actions: Iterable[ApiOperationDescriptor],
        request: RequestContext | None = None,
    ) -> SwaggerDocument:
        registry = SchemaRegistry()
        builder = OperationBuilder(registry)

        operations = []
        for action in actions:
            if action.deprecated and self.config.ignore_obsolete_actions:
                logger.debug("Ignoring obsolete action %s", action.identity)
                continue
            operation = self.pipeline.apply_operation(builder.build(action), action)
            operations.append((action, operation))

        document = self.assembler.assemble(operations, registry, request)
        logger.info(
            "Generated document %s with %d paths and %d definitions",
            self.config.version, len(document.paths), len(document.definitions),
        )
        return self.pipeline.apply_document(document)


def generate_document(
    actions: Iterable[ApiOperationDescriptor],
    config: SwaggerConfig,
    request: RequestContext | None = None,
) -> SwaggerDocument:
    return SwaggerGenerator(config).generate(actions, request)
