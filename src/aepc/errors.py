class AepcError(Exception):
    """Base class for compilation failures. Every one of them aborts the run."""


class ResourceError(AepcError):
    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(f"unable to generate resource {kind}: {reason}")
        self.kind = kind
        self.reason = reason


class UnsupportedFieldTypeError(ResourceError):
    def __init__(self, kind: str, field_name: str, field_type: str) -> None:
        super().__init__(kind, f"proto mapping for type {field_type} not found (field {field_name!r})")
        self.field_name = field_name
        self.field_type = field_type


class WellKnownTypeLoadError(ResourceError):
    def __init__(self, kind: str, type_name: str) -> None:
        super().__init__(kind, f"unable to load well-known type {type_name}")
        self.type_name = type_name


class ResourceCycleError(ResourceError):
    def __init__(self, kind: str, chain: list[str]) -> None:
        super().__init__(kind, f"parent chain forms a cycle: {' -> '.join(chain)}")
        self.chain = chain


class DescriptorBuildError(ResourceError):
    """A generated record or file was rejected while building descriptors.

    ``kind`` is the resource being compiled, or the proto file name when the
    whole file fails validation.
    """
