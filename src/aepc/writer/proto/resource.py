"""Generates the messages and RPCs of one resource's standard methods."""

import logging
import re

from aepc import constants
from aepc.errors import DescriptorBuildError, UnsupportedFieldTypeError, WellKnownTypeLoadError
from aepc.models import Method, ResourceSchema, ScalarType, resolve_scalar_type
from aepc.writer.proto.accumulator import FileAccumulator, ServiceAccumulator
from aepc.writer.proto.descriptors import Field, HttpRule, Message, ResourceReference, Rpc
from aepc.writer.proto.paths import collection_path, parent_capture_path
from aepc.writer.proto.wellknown import load_well_known_type

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def resource_field_name(schema: ResourceSchema) -> str:
    """Name of the field embedding the resource in requests, e.g. ``BookEdition`` -> ``book_edition``."""
    return _CAMEL_BOUNDARY.sub("_", schema.kind).lower()


def compile_resource(schema: ResourceSchema, file_acc: FileAccumulator, service_acc: ServiceAccumulator) -> None:
    """Add a resource's messages and RPCs to the file and service accumulators."""
    resource_mb = generate_resource_message(schema)
    _register_message(schema, file_acc, resource_mb)
    for method, add in _METHOD_GENERATORS:
        if schema.supports(method):
            add(schema, resource_mb, file_acc, service_acc)
    logger.debug("Compiled resource %s (%d methods)", schema.kind, len(schema.methods))


def generate_resource_message(schema: ResourceSchema) -> Message:
    """Build the resource message, keeping the schema's field numbers verbatim."""
    mb = Message(schema.kind, comment=f"A {schema.kind} resource.")
    for p in schema.fields_sorted_by_number():
        scalar = resolve_scalar_type(p.type)
        if scalar is None:
            raise UnsupportedFieldTypeError(schema.kind, p.name, p.type)
        _add_field(schema, mb, Field(p.name, p.number, scalar_type=scalar, comment=f"Field for {p.name}."))
    return mb


def add_create(
    schema: ResourceSchema, resource_mb: Message, file_acc: FileAccumulator, service_acc: ServiceAccumulator
) -> None:
    mb = Message(f"Create{schema.kind}Request", comment=f"A Create request for a {schema.kind} resource.")
    add_parent_field(schema, mb)
    add_id_field(schema, mb)
    add_resource_field(schema, resource_mb, mb, file_acc)
    _register_message(schema, file_acc, mb)
    body = resource_field_name(schema)
    _register_method(
        schema,
        service_acc,
        Rpc(
            f"Create{schema.kind}",
            file_acc.qualify(mb.name),
            file_acc.qualify(resource_mb.name),
            http=HttpRule("post", parent_capture_path(schema), body=body),
            signatures=[",".join([constants.FIELD_PARENT_NAME, body])],
            comment=f"An aep-compliant Create method for {schema.kind}.",
        ),
    )


def add_get(
    schema: ResourceSchema, resource_mb: Message, file_acc: FileAccumulator, service_acc: ServiceAccumulator
) -> None:
    mb = Message(f"Get{schema.kind}Request", comment=f"Request message for the Get{schema.kind} method")
    add_path_field(schema, mb)
    _register_message(schema, file_acc, mb)
    _register_method(
        schema,
        service_acc,
        Rpc(
            f"Get{schema.kind}",
            file_acc.qualify(mb.name),
            file_acc.qualify(resource_mb.name),
            http=HttpRule("get", f"/{{path={collection_path(schema)}}}"),
            signatures=[constants.FIELD_PATH_NAME],
            comment=f"An aep-compliant Get method for {schema.kind}.",
        ),
    )


def add_update(
    schema: ResourceSchema, resource_mb: Message, file_acc: FileAccumulator, service_acc: ServiceAccumulator
) -> None:
    mb = Message(f"Update{schema.kind}Request", comment=f"Request message for the Update{schema.kind} method")
    add_path_field(schema, mb)
    add_resource_field(schema, resource_mb, mb, file_acc)
    add_update_mask_field(schema, mb, file_acc)
    _register_message(schema, file_acc, mb)
    body = resource_field_name(schema)
    _register_method(
        schema,
        service_acc,
        Rpc(
            f"Update{schema.kind}",
            file_acc.qualify(mb.name),
            file_acc.qualify(resource_mb.name),
            http=HttpRule("patch", f"/{{{body}.path={collection_path(schema)}}}", body=body),
            signatures=[",".join([body, constants.FIELD_UPDATE_MASK_NAME])],
            comment=f"An aep-compliant Update method for {schema.kind}.",
        ),
    )


def add_delete(
    schema: ResourceSchema, resource_mb: Message, file_acc: FileAccumulator, service_acc: ServiceAccumulator
) -> None:
    mb = Message(f"Delete{schema.kind}Request", comment=f"Request message for the Delete{schema.kind} method")
    add_path_field(schema, mb)
    empty = _load_well_known(schema, constants.EMPTY_TYPE, file_acc)
    _register_message(schema, file_acc, mb)
    _register_method(
        schema,
        service_acc,
        Rpc(
            f"Delete{schema.kind}",
            file_acc.qualify(mb.name),
            empty,
            http=HttpRule("delete", f"/{{path={collection_path(schema)}}}"),
            signatures=[constants.FIELD_PATH_NAME],
            comment=f"An aep-compliant Delete method for {schema.kind}.",
        ),
    )


def add_list(
    schema: ResourceSchema, resource_mb: Message, file_acc: FileAccumulator, service_acc: ServiceAccumulator
) -> None:
    req_mb = Message(f"List{schema.kind}Request", comment=f"Request message for the List{schema.kind} method")
    add_parent_field(schema, req_mb)
    add_page_token_field(schema, req_mb)
    add_max_page_size_field(schema, req_mb)
    _register_message(schema, file_acc, req_mb)

    resp_mb = Message(f"List{schema.kind}Response", comment=f"Response message for the List{schema.kind} method")
    add_resources_field(schema, resource_mb, resp_mb, file_acc)
    add_next_page_token_field(schema, resp_mb)
    _register_message(schema, file_acc, resp_mb)

    _register_method(
        schema,
        service_acc,
        Rpc(
            f"List{schema.kind}",
            file_acc.qualify(req_mb.name),
            file_acc.qualify(resp_mb.name),
            http=HttpRule("get", parent_capture_path(schema)),
            signatures=[constants.FIELD_PARENT_NAME],
            comment=f"An aep-compliant List method for {schema.plural}.",
        ),
    )


def add_global_list(
    schema: ResourceSchema, resource_mb: Message, file_acc: FileAccumulator, service_acc: ServiceAccumulator
) -> None:
    req_mb = Message(
        f"GlobalList{schema.kind}Request", comment=f"Request message for the GlobalList{schema.kind} method"
    )
    add_path_field(schema, req_mb)
    add_page_token_field(schema, req_mb)
    _register_message(schema, file_acc, req_mb)

    resp_mb = Message(
        f"GlobalList{schema.kind}Response", comment=f"Response message for the GlobalList{schema.kind} method"
    )
    add_resources_field(schema, resource_mb, resp_mb, file_acc)
    add_next_page_token_field(schema, resp_mb)
    _register_message(schema, file_acc, resp_mb)

    _register_method(
        schema,
        service_acc,
        Rpc(
            f"GlobalList{schema.kind}",
            file_acc.qualify(req_mb.name),
            file_acc.qualify(resp_mb.name),
            http=HttpRule("get", f"/{{path={constants.GLOBAL_LIST_WILDCARD}/{schema.kind.lower()}}}"),
            comment=f"An aep-compliant GlobalList method for {schema.plural}.",
        ),
    )


def add_apply(
    schema: ResourceSchema, resource_mb: Message, file_acc: FileAccumulator, service_acc: ServiceAccumulator
) -> None:
    mb = Message(f"Apply{schema.kind}Request", comment=f"Request message for the Apply{schema.kind} method")
    add_path_field(schema, mb)
    add_resource_field(schema, resource_mb, mb, file_acc)
    _register_message(schema, file_acc, mb)
    _register_method(
        schema,
        service_acc,
        Rpc(
            f"Apply{schema.kind}",
            file_acc.qualify(mb.name),
            file_acc.qualify(resource_mb.name),
            http=HttpRule("put", f"/{{path={collection_path(schema)}}}", body=resource_field_name(schema)),
            comment=f"An aep-compliant Apply method for {schema.plural}.",
        ),
    )


_METHOD_GENERATORS = (
    (Method.CREATE, add_create),
    (Method.READ, add_get),
    (Method.UPDATE, add_update),
    (Method.DELETE, add_delete),
    (Method.LIST, add_list),
    (Method.GLOBAL_LIST, add_global_list),
    (Method.APPLY, add_apply),
)


# ---------------------------------------------------------------------------
# Field helpers. Each appends one field at its reserved number.
# ---------------------------------------------------------------------------


def add_parent_field(schema: ResourceSchema, mb: Message) -> None:
    _add_field(
        schema,
        mb,
        Field(
            constants.FIELD_PARENT_NAME,
            constants.FIELD_PARENT_NUMBER,
            scalar_type=ScalarType.STRING,
            required=True,
            reference=ResourceReference(),
            comment=f"A field for the parent of {schema.kind}",
        ),
    )


def add_id_field(schema: ResourceSchema, mb: Message) -> None:
    _add_field(
        schema,
        mb,
        Field(
            constants.FIELD_ID_NAME,
            constants.FIELD_ID_NUMBER,
            scalar_type=ScalarType.STRING,
            comment="An id that uniquely identifies the resource within the collection",
        ),
    )


def add_path_field(schema: ResourceSchema, mb: Message) -> None:
    _add_field(
        schema,
        mb,
        Field(
            constants.FIELD_PATH_NAME,
            constants.FIELD_PATH_NUMBER,
            scalar_type=ScalarType.STRING,
            required=True,
            reference=ResourceReference(type=schema.type),
            comment="The globally unique identifier for the resource",
        ),
    )


def add_resource_field(schema: ResourceSchema, resource_mb: Message, mb: Message, file_acc: FileAccumulator) -> None:
    _add_field(
        schema,
        mb,
        Field(
            resource_field_name(schema),
            constants.FIELD_RESOURCE_NUMBER,
            message_type=file_acc.qualify(resource_mb.name),
            required=True,
            comment="The resource to perform the operation on.",
        ),
    )


def add_resources_field(schema: ResourceSchema, resource_mb: Message, mb: Message, file_acc: FileAccumulator) -> None:
    _add_field(
        schema,
        mb,
        Field(
            constants.FIELD_RESULTS_NAME,
            constants.FIELD_RESULTS_NUMBER,
            message_type=file_acc.qualify(resource_mb.name),
            repeated=True,
            comment=f"A list of {schema.plural}",
        ),
    )


def add_page_token_field(schema: ResourceSchema, mb: Message) -> None:
    _add_field(
        schema,
        mb,
        Field(
            constants.FIELD_PAGE_TOKEN_NAME,
            constants.FIELD_PAGE_TOKEN_NUMBER,
            scalar_type=ScalarType.STRING,
            comment="The page token indicating the starting point of the page",
        ),
    )


def add_next_page_token_field(schema: ResourceSchema, mb: Message) -> None:
    _add_field(
        schema,
        mb,
        Field(
            constants.FIELD_NEXT_PAGE_TOKEN_NAME,
            constants.FIELD_NEXT_PAGE_TOKEN_NUMBER,
            scalar_type=ScalarType.STRING,
            comment="The page token indicating the ending point of this response.",
        ),
    )


def add_max_page_size_field(schema: ResourceSchema, mb: Message) -> None:
    _add_field(
        schema,
        mb,
        Field(
            constants.FIELD_MAX_PAGE_SIZE_NAME,
            constants.FIELD_MAX_PAGE_SIZE_NUMBER,
            scalar_type=ScalarType.INT32,
            comment="The maximum number of resources to return in a single page.",
        ),
    )


def add_update_mask_field(schema: ResourceSchema, mb: Message, file_acc: FileAccumulator) -> None:
    field_mask = _load_well_known(schema, constants.FIELD_MASK_TYPE, file_acc)
    _add_field(
        schema,
        mb,
        Field(
            constants.FIELD_UPDATE_MASK_NAME,
            constants.FIELD_UPDATE_MASK_NUMBER,
            message_type=field_mask,
            comment="The update mask for the resource",
        ),
    )


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def _add_field(schema: ResourceSchema, mb: Message, f: Field) -> None:
    try:
        mb.add_field(f)
    except ValueError as err:
        raise DescriptorBuildError(schema.kind, str(err)) from err


def _register_message(schema: ResourceSchema, file_acc: FileAccumulator, mb: Message) -> None:
    try:
        file_acc.add_message(mb)
    except ValueError as err:
        raise DescriptorBuildError(schema.kind, str(err)) from err


def _register_method(schema: ResourceSchema, service_acc: ServiceAccumulator, rpc: Rpc) -> None:
    try:
        service_acc.add_method(rpc)
    except ValueError as err:
        raise DescriptorBuildError(schema.kind, str(err)) from err


def _load_well_known(schema: ResourceSchema, full_name: str, file_acc: FileAccumulator) -> str:
    """Resolve a well-known type, import its file, and return its full name."""
    try:
        md = load_well_known_type(full_name)
    except KeyError as err:
        raise WellKnownTypeLoadError(schema.kind, full_name) from err
    file_acc.add_dependency(md.file.name)
    return md.full_name
