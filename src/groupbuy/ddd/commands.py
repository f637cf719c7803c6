"""Command and query base types (CQRS markers)."""
from dataclasses import dataclass


@dataclass
class Command:
    """Intent to change state; routed as POST /{context}/commands/{name}."""
    pass


@dataclass
class Query:
    """Intent to read; routed as GET|POST /{context}/queries/{name}."""
    pass
