"""
Tool modules for sanity-mcp.

Every public coroutine whose first parameter is `client` is discovered by
sanity_mcp.core.registry and exposed under its function name.
"""
