"""Hierarchy-domain exports."""

from archbridge.hierarchy.builder import (
    HierarchyBuilder,
    build_hierarchy,
    count_descendants,
    find_initiative,
    list_domains,
    list_initiatives,
)

__all__ = [
    "HierarchyBuilder",
    "build_hierarchy",
    "count_descendants",
    "find_initiative",
    "list_domains",
    "list_initiatives",
]
