"""Accumulators that collect generated records across one compilation run."""

import logging

from google.protobuf import descriptor, descriptor_pb2, descriptor_pool

from aepc.constants import GOOGLE_API_IMPORTS
from aepc.errors import DescriptorBuildError
from aepc.writer.proto.descriptors import Message, Rpc
from aepc.writer.proto.wellknown import load_file_with_dependencies

logger = logging.getLogger(__name__)

# Field numbers inside FileDescriptorProto / DescriptorProto / ServiceDescriptorProto,
# used to address comments in SourceCodeInfo.
_FILE_MESSAGE_TYPE = 4
_FILE_SERVICE = 6
_MESSAGE_FIELD = 2
_SERVICE_METHOD = 2


class FileAccumulator:
    def __init__(self, package: str, file_name: str) -> None:
        self.package = package
        self.file_name = file_name
        self.messages: list[Message] = []
        self.dependencies: list[str] = list(GOOGLE_API_IMPORTS)
        self._names: set[str] = set()

    def qualify(self, name: str) -> str:
        return f"{self.package}.{name}" if self.package else name

    def add_message(self, message: Message) -> None:
        if message.name in self._names:
            raise ValueError(f"message {message.name} already registered in {self.file_name}")
        self._names.add(message.name)
        self.messages.append(message)
        logger.debug("Registered message %s", message.name)

    def add_dependency(self, file_name: str) -> None:
        if file_name not in self.dependencies:
            self.dependencies.append(file_name)

    def get_message(self, name: str) -> Message:
        for message in self.messages:
            if message.name == name:
                return message
        raise KeyError(name)

    def message_names(self) -> list[str]:
        return [m.name for m in self.messages]


class ServiceAccumulator:
    def __init__(self, name: str) -> None:
        self.name = name
        self.methods: list[Rpc] = []
        self._names: set[str] = set()

    def add_method(self, rpc: Rpc) -> None:
        if rpc.name in self._names:
            raise ValueError(f"method {rpc.name} already registered in service {self.name}")
        self._names.add(rpc.name)
        self.methods.append(rpc)
        logger.debug("Registered method %s", rpc.name)

    def get_method(self, name: str) -> Rpc:
        for rpc in self.methods:
            if rpc.name == name:
                return rpc
        raise KeyError(name)

    def method_names(self) -> list[str]:
        return [m.name for m in self.methods]


def _add_comment(info: descriptor_pb2.SourceCodeInfo, path: list[int], comment: str) -> None:
    if not comment:
        return
    location = info.location.add()
    location.path.extend(path)
    location.leading_comments = f" {comment}\n"


def build_file_descriptor(
    file_acc: FileAccumulator, service_acc: ServiceAccumulator
) -> descriptor_pb2.FileDescriptorProto:
    """Render both accumulators into a single proto3 file descriptor, comments included."""
    fdp = descriptor_pb2.FileDescriptorProto(
        name=file_acc.file_name,
        package=file_acc.package,
        syntax="proto3",
        dependency=file_acc.dependencies,
    )
    info = fdp.source_code_info
    for i, message in enumerate(file_acc.messages):
        fdp.message_type.append(message.to_proto())
        _add_comment(info, [_FILE_MESSAGE_TYPE, i], message.comment)
        for j, f in enumerate(message.fields):
            _add_comment(info, [_FILE_MESSAGE_TYPE, i, _MESSAGE_FIELD, j], f.comment)

    service = fdp.service.add(name=service_acc.name)
    for k, rpc in enumerate(service_acc.methods):
        service.method.append(rpc.to_proto())
        _add_comment(info, [_FILE_SERVICE, 0, _SERVICE_METHOD, k], rpc.comment)
    return fdp


def validate_file_descriptor(fdp: descriptor_pb2.FileDescriptorProto) -> descriptor.FileDescriptor:
    """Load the file into a fresh pool alongside its imports.

    Catches unresolved type names, duplicate numbers and other structural
    problems the protobuf runtime knows about.
    """
    pool = descriptor_pool.DescriptorPool()
    loaded: set[str] = set()
    try:
        for dependency in fdp.dependency:
            for fd in load_file_with_dependencies(dependency):
                if fd.name in loaded:
                    continue
                dep_proto = descriptor_pb2.FileDescriptorProto()
                fd.CopyToProto(dep_proto)
                pool.Add(dep_proto)
                loaded.add(fd.name)
        pool.Add(fdp)
        return pool.FindFileByName(fdp.name)
    except (TypeError, KeyError) as err:
        raise DescriptorBuildError(fdp.name, str(err)) from err
