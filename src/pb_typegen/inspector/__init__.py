from pb_typegen.inspector.errors import SchemaSourceError

__all__ = ["SchemaSourceError"]
