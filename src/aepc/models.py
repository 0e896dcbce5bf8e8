from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ScalarType(str, Enum):
    STRING = "string"
    INT32 = "int32"
    INT64 = "int64"
    BOOLEAN = "boolean"
    DOUBLE = "double"
    FLOAT = "float"


_SCALAR_ALIASES = {"bool": ScalarType.BOOLEAN}


def resolve_scalar_type(type_name: str) -> ScalarType | None:
    """Return the scalar kind for a declared type name, or None if it has no mapping."""
    normalized = type_name.strip().lower()
    if normalized in _SCALAR_ALIASES:
        return _SCALAR_ALIASES[normalized]
    try:
        return ScalarType(normalized)
    except ValueError:
        return None


class Method(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    LIST = "list"
    GLOBAL_LIST = "global_list"
    APPLY = "apply"


class FieldSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    number: int = Field(gt=0)


class ResourceSchema(BaseModel):
    """A parsed resource definition.

    ``parents`` holds live references to already-parsed ancestors. Only the
    first parent takes part in path generation.
    """

    model_config = ConfigDict(frozen=True)

    kind: str
    plural: str
    type: str
    fields: tuple[FieldSchema, ...] = ()
    parents: tuple["ResourceSchema", ...] = ()
    methods: frozenset[Method] = frozenset()

    @property
    def parent(self) -> "ResourceSchema | None":
        return self.parents[0] if self.parents else None

    def fields_sorted_by_number(self) -> list[FieldSchema]:
        return sorted(self.fields, key=lambda f: f.number)

    def supports(self, method: Method) -> bool:
        return method in self.methods


ResourceSchema.model_rebuild()  # necessary for recursive types


class ServiceConfig(BaseModel):
    name: str
    package: str
    file_name: str | None = None

    def resolved_file_name(self) -> str:
        if self.file_name:
            return self.file_name
        if not self.package:
            return f"{self.name.lower()}.proto"
        return "/".join(self.package.split(".")) + f"/{self.name.lower()}.proto"
