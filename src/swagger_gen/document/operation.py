"""Operation builder: one discovered action becomes one Swagger operation."""

import logging

from swagger_gen.document.actions import ApiOperationDescriptor, ParameterDescriptor, ParameterLocation
from swagger_gen.document.models import Operation, Parameter, Response
from swagger_gen.document.paths import template_parameters
from swagger_gen.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)

SUCCESS_STATUS = "200"

# keys a non-body parameter may take over from an inline schema
_SIMPLE_PARAMETER_KEYS = ("type", "format", "items", "enum")

_LOCATION_ORDER = (
    ParameterLocation.QUERY,
    ParameterLocation.HEADER,
    ParameterLocation.FORM_DATA,
    ParameterLocation.BODY,
)


def _dedupe(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


class OperationBuilder:
    """Builds Operation models, resolving every type through one registry."""

    def __init__(self, registry: SchemaRegistry):
        self.registry = registry

    def build(self, action: ApiOperationDescriptor) -> Operation:
        takes_input = any(
            p.location in (ParameterLocation.BODY, ParameterLocation.FORM_DATA) for p in action.parameters
        )
        operation = Operation(
            operation_id=action.identity,
            consumes=_dedupe(action.consumes) if takes_input else [],
            produces=_dedupe(action.produces) if action.response_type is not None else [],
            parameters=self._build_parameters(action),
            responses={SUCCESS_STATUS: self._build_success_response(action)},
            deprecated=action.deprecated,
        )
        logger.debug("Built operation %s (%s %s)", operation.operation_id, action.method, action.path)
        return operation

    def _build_parameters(self, action: ApiOperationDescriptor) -> list[Parameter]:
        placeholders = template_parameters(action.path)
        path_params = action.parameters_in(ParameterLocation.PATH)

        def template_position(param: ParameterDescriptor) -> int:
            # path parameters missing from the template keep declaration order, after the rest
            return placeholders.index(param.name) if param.name in placeholders else len(placeholders)

        ordered = sorted(path_params, key=template_position)
        for location in _LOCATION_ORDER:
            ordered.extend(action.parameters_in(location))

        parameters = [self._build_parameter(p, action) for p in ordered]

        # Route placeholders the action does not declare, e.g. "{apiVersion}"
        declared = {p.name for p in action.parameters}
        for name in placeholders:
            if name not in declared:
                parameters.append(Parameter(name=name, in_="path", required=True, type="string"))
                declared.add(name)
        return parameters

    def _build_parameter(self, param: ParameterDescriptor, action: ApiOperationDescriptor) -> Parameter:
        schema = self.registry.resolve(param.type)
        if param.location == ParameterLocation.BODY:
            return Parameter(
                name=param.name,
                in_=param.location.value,
                required=param.required,
                description=param.description,
                schema_=schema,
            )

        if "$ref" in schema:
            logger.warning(
                "Parameter '%s' of %s is in %s but has object type %s; documenting it as a string",
                param.name, action.identity, param.location.value, param.type.identity,
            )
            schema = {"type": "string"}

        fields = {key: schema[key] for key in _SIMPLE_PARAMETER_KEYS if key in schema}
        if fields.get("type") == "array":
            fields["collection_format"] = "csv"
        return Parameter(
            name=param.name,
            in_=param.location.value,
            required=param.required,
            description=param.description,
            **fields,
        )

    def _build_success_response(self, action: ApiOperationDescriptor) -> Response:
        if action.response_type is None:
            return Response()
        return Response(schema_=self.registry.resolve(action.response_type))
