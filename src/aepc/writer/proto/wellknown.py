from google.protobuf import descriptor, descriptor_pool

# Imported for their side effect of registering the types in the default pool.
from google.protobuf import empty_pb2, field_mask_pb2  # noqa: F401


def load_well_known_type(full_name: str) -> descriptor.Descriptor:
    """Resolve a message type from the default descriptor pool. Raises KeyError if unknown."""
    return descriptor_pool.Default().FindMessageTypeByName(full_name)


def load_file_with_dependencies(file_name: str) -> list[descriptor.FileDescriptor]:
    """Return ``file_name`` and its transitive imports from the default pool, dependencies first."""
    ordered: list[descriptor.FileDescriptor] = []
    seen: set[str] = set()

    def visit(fd: descriptor.FileDescriptor) -> None:
        if fd.name in seen:
            return
        seen.add(fd.name)
        for dep in fd.dependencies:
            visit(dep)
        ordered.append(fd)

    visit(descriptor_pool.Default().FindFileByName(file_name))
    return ordered
