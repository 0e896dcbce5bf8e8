"""Generated message and method records.

Annotations that protobuf models as option extensions (HTTP binding, field
behavior, resource references, method signatures) are explicit attributes here
and only become extensions when a record is rendered with ``to_proto``.
"""

import re
from dataclasses import dataclass, field

from google.api import annotations_pb2, client_pb2, field_behavior_pb2, http_pb2, resource_pb2
from google.protobuf import descriptor_pb2

from aepc.models import ScalarType

SCALAR_FIELD_TYPES: dict[ScalarType, int] = {
    ScalarType.STRING: descriptor_pb2.FieldDescriptorProto.TYPE_STRING,
    ScalarType.INT32: descriptor_pb2.FieldDescriptorProto.TYPE_INT32,
    ScalarType.INT64: descriptor_pb2.FieldDescriptorProto.TYPE_INT64,
    ScalarType.BOOLEAN: descriptor_pb2.FieldDescriptorProto.TYPE_BOOL,
    ScalarType.DOUBLE: descriptor_pb2.FieldDescriptorProto.TYPE_DOUBLE,
    ScalarType.FLOAT: descriptor_pb2.FieldDescriptorProto.TYPE_FLOAT,
}

_HTTP_VERBS = ("get", "put", "post", "delete", "patch")

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

MAX_FIELD_NUMBER = 536870911
# Reserved for the protobuf implementation.
RESERVED_FIELD_NUMBERS = range(19000, 20000)


@dataclass(frozen=True)
class ResourceReference:
    # An empty type is an unconstrained reference.
    type: str = ""


@dataclass(frozen=True)
class HttpRule:
    verb: str
    path: str
    body: str = ""

    def __post_init__(self) -> None:
        if self.verb not in _HTTP_VERBS:
            raise ValueError(f"Unsupported HTTP verb '{self.verb}'. Supported: {list(_HTTP_VERBS)}")

    def to_proto(self) -> http_pb2.HttpRule:
        rule = http_pb2.HttpRule(body=self.body)
        setattr(rule, self.verb, self.path)
        return rule


@dataclass
class Field:
    name: str
    number: int
    scalar_type: ScalarType | None = None
    message_type: str | None = None
    repeated: bool = False
    required: bool = False
    reference: ResourceReference | None = None
    comment: str = ""

    def __post_init__(self) -> None:
        if (self.scalar_type is None) == (self.message_type is None):
            raise ValueError(f"field {self.name!r} must have exactly one of a scalar type or a message type")

    def to_proto(self) -> descriptor_pb2.FieldDescriptorProto:
        fd = descriptor_pb2.FieldDescriptorProto(
            name=self.name,
            number=self.number,
            label=(
                descriptor_pb2.FieldDescriptorProto.LABEL_REPEATED
                if self.repeated
                else descriptor_pb2.FieldDescriptorProto.LABEL_OPTIONAL
            ),
        )
        if self.message_type is not None:
            fd.type = descriptor_pb2.FieldDescriptorProto.TYPE_MESSAGE
            fd.type_name = f".{self.message_type}"
        elif self.scalar_type is not None:
            fd.type = SCALAR_FIELD_TYPES[self.scalar_type]

        if self.required:
            fd.options.Extensions[field_behavior_pb2.field_behavior].append(field_behavior_pb2.FieldBehavior.REQUIRED)
        if self.reference is not None:
            ref = fd.options.Extensions[resource_pb2.resource_reference]
            ref.SetInParent()
            if self.reference.type:
                ref.type = self.reference.type
        return fd


@dataclass
class Message:
    name: str
    comment: str = ""
    fields: list[Field] = field(default_factory=list)

    def add_field(self, f: Field) -> None:
        if not _IDENTIFIER.fullmatch(f.name):
            raise ValueError(f"field name {f.name!r} of {self.name} is not a valid identifier")
        if not 1 <= f.number <= MAX_FIELD_NUMBER:
            raise ValueError(f"field number {f.number} of {self.name} is outside 1..{MAX_FIELD_NUMBER}")
        if f.number in RESERVED_FIELD_NUMBERS:
            raise ValueError(f"field number {f.number} of {self.name} is in the reserved range 19000-19999")
        for existing in self.fields:
            if existing.number == f.number:
                raise ValueError(f"field number {f.number} of {self.name} used by both {existing.name} and {f.name}")
            if existing.name == f.name:
                raise ValueError(f"field name {f.name!r} of {self.name} used twice")
        self.fields.append(f)

    def field_numbers(self) -> dict[str, int]:
        return {f.name: f.number for f in self.fields}

    def get_field(self, name: str) -> Field:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    def to_proto(self) -> descriptor_pb2.DescriptorProto:
        return descriptor_pb2.DescriptorProto(name=self.name, field=[f.to_proto() for f in self.fields])


@dataclass
class Rpc:
    name: str
    input_type: str
    output_type: str
    http: HttpRule
    signatures: list[str] = field(default_factory=list)
    comment: str = ""

    def to_proto(self) -> descriptor_pb2.MethodDescriptorProto:
        md = descriptor_pb2.MethodDescriptorProto(
            name=self.name,
            input_type=f".{self.input_type}",
            output_type=f".{self.output_type}",
        )
        md.options.Extensions[annotations_pb2.http].CopyFrom(self.http.to_proto())
        if self.signatures:
            md.options.Extensions[client_pb2.method_signature].extend(self.signatures)
        return md
