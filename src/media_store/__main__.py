"""Entry point for the media-store MCP server."""

from media_store.server import create_server


def main() -> None:
    """Run the media-store MCP server."""
    server = create_server()
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
