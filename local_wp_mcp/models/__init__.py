"""Pydantic models for tool inputs and resolved configuration."""

from .config import LocalSite, MySQLConfig, SiteEnvironment
from .posts import (
    MenuItemAddInput,
    PostCreateInput,
    PostDeleteInput,
    PostUpdateInput,
    WpCliInput,
)
from .query import MySQLQueryInput, MySQLSchemaInput

__all__ = [
    # Configuration
    "MySQLConfig",
    "LocalSite",
    "SiteEnvironment",
    # MySQL
    "MySQLQueryInput",
    "MySQLSchemaInput",
    # WP-CLI
    "WpCliInput",
    "PostCreateInput",
    "PostUpdateInput",
    "PostDeleteInput",
    "MenuItemAddInput",
]
