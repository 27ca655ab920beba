# =============================================================================
# main.py  —  Entry Point for the Context Repo MCP Server
# =============================================================================
#
# HOW TO RUN:
#   CONTEXTREPO_API_KEY=gm_... uv run python main.py
#   (or install the package and run `context-repo-mcp`)
#
# WHAT HAPPENS:
#   1. Loads a .env file if one exists (python-dotenv)
#   2. Reads Settings from the environment (core/config.py)
#        → no CONTEXTREPO_API_KEY?  print a boxed error and exit(1)
#          BEFORE any MCP channel is opened
#   3. Configures stderr logging and prints a startup banner
#   4. Builds the FastMCP server (tools/mcp_server.py)
#   5. Serves MCP over stdio until the client disconnects
#
# MCP CLIENT CONFIG (Claude Desktop, Cursor, ...):
#   {
#     "command": "uv",
#     "args": ["run", "python", "/path/to/main.py"],
#     "env": {"CONTEXTREPO_API_KEY": "gm_..."}
#   }
# =============================================================================

import sys

from dotenv import load_dotenv

from core.config import SERVER_VERSION, Settings, load_settings
from core.errors import ConfigurationError
from tools.mcp_server import build_server, configure_logging

_BOX_WIDTH = 64


def _boxed(lines: list[str]) -> str:
    top = "╔" + "═" * _BOX_WIDTH + "╗"
    bottom = "╚" + "═" * _BOX_WIDTH + "╝"
    body = [f"║  {line:<{_BOX_WIDTH - 2}}║" for line in lines]
    return "\n".join([top, *body, bottom])


def _report_configuration_error(error: ConfigurationError) -> None:
    print(
        _boxed([
            f"ERROR: {error.message}",
            "",
            "To fix this:",
            "1. Get an API key from https://contextrepo.com/dashboard",
            "2. Add it to your MCP client config",
        ]),
        file=sys.stderr,
    )


def _print_banner(settings: Settings) -> None:
    key_status = "✓ Valid format (gm_***)" if settings.key_looks_valid else "⚠ Invalid format"
    print(_boxed([f"Context Repo MCP Server v{SERVER_VERSION}".center(_BOX_WIDTH - 4)]), file=sys.stderr)
    print(f"[Config] API: {settings.api_base_url}", file=sys.stderr)
    print(f"[Config] Key: {key_status}", file=sys.stderr)
    print("", file=sys.stderr)


def main() -> None:
    """Validate configuration, then serve MCP over stdio."""
    load_dotenv()

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        _report_configuration_error(exc)
        sys.exit(1)

    configure_logging(settings.log_level)
    _print_banner(settings)

    mcp = build_server(settings)
    print("[Server] Ready - waiting for MCP client connection", file=sys.stderr)
    mcp.run()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()
