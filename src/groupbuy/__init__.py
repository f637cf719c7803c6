"""
groupbuy: group-buying storefront service.
Campaign prices fall linearly from a starting to a final price as buyers join;
the application is composed from bounded-context modules via app.register(module).
"""
__version__ = "0.1.0"

from groupbuy.core import Application, Config, Container, Module, Settings

__all__ = [
    "Application",
    "Config",
    "Container",
    "Module",
    "Settings",
    "__version__",
]
