"""
MCP Server - Directory search tools for agents

Run with: python -m connectltv.mcp_server.server
"""
