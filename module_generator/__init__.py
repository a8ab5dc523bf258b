"""Module generator -- scaffolds Laravel CRUD modules from a compact field DSL."""

__version__ = "0.1.0"
