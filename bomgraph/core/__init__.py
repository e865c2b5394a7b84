"""Core graph construction for bundle SBOMs."""

__all__ = [
    "assembly",
    "builder",
    "config",
    "edges",
    "errors",
    "graph",
    "identity",
    "locator",
    "registry",
    "reporter",
    "roots",
]
