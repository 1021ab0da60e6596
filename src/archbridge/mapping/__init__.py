"""Field-mapping exports."""

from archbridge.mapping.engine import DEFAULT_FIELD_MAPPINGS, FieldMappingEngine, create_field_mapper

__all__ = ["DEFAULT_FIELD_MAPPINGS", "FieldMappingEngine", "create_field_mapper"]
