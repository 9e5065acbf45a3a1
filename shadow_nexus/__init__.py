"""
Shadow Nexus - Officer Intelligence for Star Trek Fleet Command

A Discord bot, CLI and MCP server that look up, search and compare
officers from a read-only STFC.space data snapshot.
"""

__version__ = "0.1.0"
