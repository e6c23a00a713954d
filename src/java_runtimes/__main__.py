"""Run the java-runtimes MCP server with ``python -m java_runtimes``."""

from .mcp_server import main

if __name__ == "__main__":
    main()
