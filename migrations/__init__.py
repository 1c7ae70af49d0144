from .service import apply_schema, apply_schema_sql, SCHEMA_PATH

__all__ = ['apply_schema', 'apply_schema_sql', 'SCHEMA_PATH']
