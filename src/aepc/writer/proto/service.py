import logging
from collections.abc import Iterable

from google.protobuf import descriptor_pb2

from aepc.models import ResourceSchema, ServiceConfig
from aepc.writer.proto.accumulator import (
    FileAccumulator,
    ServiceAccumulator,
    build_file_descriptor,
    validate_file_descriptor,
)
from aepc.writer.proto.paths import ancestor_chain
from aepc.writer.proto.resource import compile_resource

logger = logging.getLogger(__name__)


def order_resources(resources: Iterable[ResourceSchema]) -> list[ResourceSchema]:
    """Order resources so every ancestor precedes its descendants.

    Ancestors reachable through first-parent links but missing from the input
    are not added. Input order is kept otherwise.
    """
    requested = list(resources)
    wanted = {id(r) for r in requested}
    ordered: list[ResourceSchema] = []
    placed: set[int] = set()
    for resource in requested:
        for r in ancestor_chain(resource):
            if id(r) in wanted and id(r) not in placed:
                placed.add(id(r))
                ordered.append(r)
    return ordered


def compile_service(
    resources: Iterable[ResourceSchema], config: ServiceConfig, validate: bool = True
) -> descriptor_pb2.FileDescriptorProto:
    """Run one compilation over all resources with fresh accumulators.

    Any error aborts the run; nothing is returned for a partial compilation.
    """
    file_acc = FileAccumulator(config.package, config.resolved_file_name())
    service_acc = ServiceAccumulator(config.name)
    ordered = order_resources(resources)
    for resource in ordered:
        compile_resource(resource, file_acc, service_acc)

    fdp = build_file_descriptor(file_acc, service_acc)
    if validate:
        validate_file_descriptor(fdp)
    logger.info(
        "Compiled %d resources into %s (%d messages, %d methods)",
        len(ordered),
        fdp.name,
        len(file_acc.messages),
        len(service_acc.methods),
    )
    return fdp
