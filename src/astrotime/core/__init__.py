"""Value types and calendar arithmetic (stdlib only)."""
