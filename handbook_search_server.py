#!/usr/bin/env python3
"""
Handbook Search MCP Server

A Model Context Protocol server that answers questions about the Contoso
employee handbook. Queries are embedded with Amazon Bedrock and matched
against the "employeehandbook" index of Azure AI Search.

Built with the FastMCP framework.
"""

import os
import sys

from handbook_search.server import initialize_server, get_server, set_components

# Initialize server components at module level for FastMCP CLI
config, aws_client, adapter = initialize_server()
set_components(config, aws_client, adapter)

# Expose mcp variable for FastMCP CLI
mcp = get_server()


def main():
    """Main entry point for the MCP server."""
    try:
        server = get_server()

        transport = os.getenv("MCP_TRANSPORT", "stdio")

        if transport in ["http", "sse", "streamable-http"]:
            host = os.getenv("MCP_HTTP_HOST", "0.0.0.0")
            port = int(os.getenv("MCP_HTTP_PORT", "8080"))
            print(f"[INFO] Starting {transport} transport on {host}:{port}", file=sys.stderr)
            server.run(transport=transport, host=host, port=port)
        else:
            print("[INFO] Starting stdio transport", file=sys.stderr)
            server.run()

    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user", file=sys.stderr)
        sys.exit(0)
    except Exception as e:
        print(f"[ERROR] Server failed to start: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
