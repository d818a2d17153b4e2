"""WP-CLI backed tools for managing the Local WordPress site."""

from __future__ import annotations

from mcp.server.fastmcp import Context

from ..config import logger
from ..lifespan import get_app
from ..models import (
    MenuItemAddInput,
    PostCreateInput,
    PostDeleteInput,
    PostUpdateInput,
    WpCliInput,
)
from ..utils import handle_exception, split_command
from ..wp_cli import WpCli


async def run_command(wp: WpCli, command: str) -> str:
    try:
        request = WpCliInput(command=command)
        main_cmd, cmd_args = split_command(request.command)
        logger.debug("Executing wp_cli: %s %s", main_cmd, cmd_args)
        return await wp.run(main_cmd, cmd_args)
    except Exception as e:
        return handle_exception(e)


async def create_post(wp: WpCli, **fields) -> str:
    try:
        post_id = await wp.create_post(PostCreateInput(**fields))
        return f"Success: Created post {post_id}"
    except Exception as e:
        return handle_exception(e)


async def update_post(wp: WpCli, **fields) -> str:
    try:
        request = PostUpdateInput(**fields)
        await wp.update_post(request)
        return f"Success: Updated post {request.post_id}"
    except Exception as e:
        return handle_exception(e)


async def delete_post(wp: WpCli, post_id: int, force: bool = False) -> str:
    try:
        request = PostDeleteInput(post_id=post_id, force=force)
        return await wp.delete_post(request.post_id, request.force)
    except Exception as e:
        return handle_exception(e)


async def add_menu_item(wp: WpCli, **fields) -> str:
    try:
        return await wp.add_menu_item(MenuItemAddInput(**fields))
    except Exception as e:
        return handle_exception(e)


def register_wp_tools(mcp):
    """Register WP-CLI tools with the MCP server."""

    @mcp.tool(
        name="wp_cli",
        annotations={
            "title": "Run WP-CLI Command",
            "readOnlyHint": False,
            "destructiveHint": True,
            "idempotentHint": False,
            "openWorldHint": False,
        },
    )
    async def wp_cli(command: str, ctx: Context = None) -> str:
        """Execute a WP-CLI command on the Local WordPress site.

        The MySQL socket connection is handled automatically.

        Args:
            command: WP-CLI command without the "wp" prefix.
                Example: "post list --post_type=page".

        Returns:
            str: Raw WP-CLI output.
        """
        return await run_command(get_app(ctx).wp, command)

    @mcp.tool(
        name="wp_post_create",
        annotations={
            "title": "Create WordPress Post",
            "readOnlyHint": False,
            "destructiveHint": False,
            "idempotentHint": False,
            "openWorldHint": False,
        },
    )
    async def wp_post_create(
        post_title: str,
        post_type: str = "post",
        post_content: str | None = None,
        post_status: str = "publish",
        post_name: str | None = None,
        post_parent: int | None = None,
        ctx: Context = None,
    ) -> str:
        """Create a new WordPress post or page.

        Args:
            post_title: Post title.
            post_type: Post type (post, page, or custom post type).
            post_content: Post content (supports Gutenberg blocks).
            post_status: Post status (publish, draft, pending, private).
            post_name: Post slug (URL-friendly name).
            post_parent: Parent post ID (for hierarchical post types).

        Returns:
            str: "Success: Created post <id>".
        """
        return await create_post(
            get_app(ctx).wp,
            post_title=post_title,
            post_type=post_type,
            post_content=post_content,
            post_status=post_status,
            post_name=post_name,
            post_parent=post_parent,
        )

    @mcp.tool(
        name="wp_post_update",
        annotations={
            "title": "Update WordPress Post",
            "readOnlyHint": False,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": False,
        },
    )
    async def wp_post_update(
        post_id: int,
        post_title: str | None = None,
        post_content: str | None = None,
        post_status: str | None = None,
        post_name: str | None = None,
        ctx: Context = None,
    ) -> str:
        """Update an existing WordPress post or page.

        Only the fields given are changed.

        Args:
            post_id: ID of the post to update.
            post_title: New post title.
            post_content: New post content.
            post_status: New post status.
            post_name: New post slug.

        Returns:
            str: "Success: Updated post <id>".
        """
        return await update_post(
            get_app(ctx).wp,
            post_id=post_id,
            post_title=post_title,
            post_content=post_content,
            post_status=post_status,
            post_name=post_name,
        )

    @mcp.tool(
        name="wp_post_delete",
        annotations={
            "title": "Delete WordPress Post",
            "readOnlyHint": False,
            "destructiveHint": True,
            "idempotentHint": False,
            "openWorldHint": False,
        },
    )
    async def wp_post_delete(post_id: int, force: bool = False, ctx: Context = None) -> str:
        """Delete a WordPress post or page.

        Args:
            post_id: ID of the post to delete.
            force: Skip trash and permanently delete.

        Returns:
            str: Raw WP-CLI output.
        """
        return await delete_post(get_app(ctx).wp, post_id, force)

    @mcp.tool(
        name="wp_menu_item_add",
        annotations={
            "title": "Add Navigation Menu Item",
            "readOnlyHint": False,
            "destructiveHint": False,
            "idempotentHint": False,
            "openWorldHint": False,
        },
    )
    async def wp_menu_item_add(
        menu: str,
        post_id: int,
        title: str | None = None,
        parent_id: int | None = None,
        ctx: Context = None,
    ) -> str:
        """Add a post or page to a WordPress navigation menu.

        Args:
            menu: Menu name, slug or ID.
            post_id: Post/page ID to add to the menu.
            title: Menu item title (uses the post title if not provided).
            parent_id: Parent menu item ID for submenus.

        Returns:
            str: Raw WP-CLI output.
        """
        return await add_menu_item(
            get_app(ctx).wp,
            menu=menu,
            post_id=post_id,
            title=title,
            parent_id=parent_id,
        )
