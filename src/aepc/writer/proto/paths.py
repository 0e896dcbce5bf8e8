from aepc.errors import ResourceCycleError
from aepc.models import ResourceSchema


def ancestor_chain(schema: ResourceSchema) -> list[ResourceSchema]:
    """Return the resource and its first-parent ancestors, outermost first."""
    chain = [schema]
    seen = {id(schema)}
    current = schema.parent
    while current is not None:
        if id(current) in seen:
            raise ResourceCycleError(schema.kind, [r.kind for r in chain] + [current.kind])
        seen.add(id(current))
        chain.append(current)
        current = current.parent
    chain.reverse()
    return chain


def collection_path(schema: ResourceSchema) -> str:
    """Path template addressing one instance, e.g. ``stores/*/shelves/*/books/*``."""
    elements = [r.plural.lower() for r in ancestor_chain(schema)]
    return "/*/".join(elements) + "/*"


def parent_capture_path(schema: ResourceSchema) -> str:
    """HTTP template binding the ``parent`` field to the collection under the immediate parent."""
    parent_path = ""
    if schema.parent is not None:
        parent_path = collection_path(schema.parent) + "/"
    return f"/{{parent={parent_path}{schema.plural.lower()}}}"
