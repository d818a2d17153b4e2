"""Input models for the WP-CLI backed tools."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class WpCliInput(BaseModel):
    """Input for a raw WP-CLI command."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    command: str = Field(
        ...,
        description='WP-CLI command without the "wp" prefix, e.g. "post list --post_type=page".',
        min_length=1,
    )


class PostCreateInput(BaseModel):
    """Input for creating a post or page."""

    model_config = ConfigDict(extra="forbid")

    post_title: str = Field(..., description="Post title.")
    post_type: str | None = Field(
        default=None, description="Post type (post, page, or custom post type)."
    )
    post_content: str | None = Field(
        default=None, description="Post content (supports Gutenberg blocks)."
    )
    post_status: str | None = Field(
        default=None, description="Post status (publish, draft, pending, private)."
    )
    post_name: str | None = Field(default=None, description="Post slug.")
    post_parent: int | None = Field(
        default=None, description="Parent post ID (hierarchical post types).", ge=0
    )


class PostUpdateInput(BaseModel):
    """Input for updating a post or page."""

    model_config = ConfigDict(extra="forbid")

    post_id: int = Field(..., description="ID of the post to update.", ge=1)
    post_title: str | None = Field(default=None, description="New post title.")
    post_content: str | None = Field(default=None, description="New post content.")
    post_status: str | None = Field(default=None, description="New post status.")
    post_name: str | None = Field(default=None, description="New post slug.")


class PostDeleteInput(BaseModel):
    """Input for deleting a post or page."""

    model_config = ConfigDict(extra="forbid")

    post_id: int = Field(..., description="ID of the post to delete.", ge=1)
    force: bool = Field(default=False, description="Skip trash and delete permanently.")


class MenuItemAddInput(BaseModel):
    """Input for adding a post to a navigation menu."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    menu: str = Field(..., description="Menu name, slug or ID.", min_length=1)
    post_id: int = Field(..., description="Post/page ID to add.", ge=1)
    title: str | None = Field(
        default=None, description="Menu item title (defaults to the post title)."
    )
    parent_id: int | None = Field(
        default=None, description="Parent menu item ID for submenus.", ge=0
    )
