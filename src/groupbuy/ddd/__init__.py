from groupbuy.ddd.commands import Command, Query
from groupbuy.ddd.domain_module import DomainModule

__all__ = [
    "Command",
    "DomainModule",
    "Query",
]
