from aepc.writer.proto.accumulator import (
    FileAccumulator,
    ServiceAccumulator,
    build_file_descriptor,
    validate_file_descriptor,
)
from aepc.writer.proto.descriptors import Field, HttpRule, Message, ResourceReference, Rpc
from aepc.writer.proto.paths import ancestor_chain, collection_path, parent_capture_path
from aepc.writer.proto.resource import compile_resource, generate_resource_message
from aepc.writer.proto.service import compile_service, order_resources

__all__ = [
    "Field",
    "FileAccumulator",
    "HttpRule",
    "Message",
    "ResourceReference",
    "Rpc",
    "ServiceAccumulator",
    "ancestor_chain",
    "build_file_descriptor",
    "collection_path",
    "compile_resource",
    "compile_service",
    "generate_resource_message",
    "order_resources",
    "parent_capture_path",
    "validate_file_descriptor",
]
