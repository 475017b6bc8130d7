"""Resource types, conditions, validation and field indexers for managed clusters, templates and releases."""

__version__ = "0.1.0"
__all__ = [
    "meta",
    "templates",
    "managedcluster",
    "management",
    "release",
    "templatemanagement",
    "indexers",
]