"""MCP server over stdio exposing Jujutsu (jj) version control commands as tools."""

__version__ = "1.0.0"
__all__ = ["__version__"]