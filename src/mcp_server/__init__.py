"""MCP server package for Spruthub."""
