"""Frankenbite MCP server."""
