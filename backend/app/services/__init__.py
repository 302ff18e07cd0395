"""Services Layer — use cases orchestrating core rules and repository ports."""
