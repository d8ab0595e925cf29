"""
Schema validation for configuration management.

This module loads the bundled JSON schema and validates configuration
dictionaries against it with ``jsonschema``.
"""

import logging
from typing import Any, Dict, Optional

import jsonschema

from ...exceptions.config_exceptions import (
    ConfigurationError,
    ConfigurationSchemaError,
    ConfigurationValidationError,
)
from .file_operations import FileOperations
from .paths import ConfigPaths


logger = logging.getLogger(__name__)


class SchemaValidator:
    """
    Schema validation for configuration management.

    Every schema error is reported, not only the first one found.
    """

    def __init__(self, file_ops: FileOperations, paths: ConfigPaths) -> None:
        self.file_ops = file_ops
        self.paths = paths
        self.logger = logger

    def load_schema(self, schema_file: Optional[str] = None) -> Dict[str, Any]:
        """
        Load the JSON schema for configuration validation.

        Args:
            schema_file: Path to schema file (default: bundled config_schema.json)

        Raises:
            ConfigurationSchemaError: If the schema cannot be loaded
        """
        schema_path = self.file_ops.resolve_path(schema_file or self.paths.schema_path)

        try:
            return self.file_ops.load_json_file(schema_path)
        except ConfigurationError as e:
            raise ConfigurationSchemaError(
                f"Configuration schema could not be loaded: {e}",
                str(schema_path)
            ) from e

    def validate_config(
        self,
        config: Dict[str, Any],
        schema_file: Optional[str] = None,
        config_file: Optional[str] = None
    ) -> bool:
        """
        Validate configuration against the schema.

        Args:
            config: Configuration dictionary to validate
            schema_file: Path to schema file (uses the bundled schema if None)
            config_file: Configuration file name for error reporting

        Returns:
            True if validation passes

        Raises:
            ConfigurationValidationError: If validation fails
            ConfigurationSchemaError: If the schema itself is invalid
        """
        schema = self.load_schema(schema_file)

        try:
            validator_cls = jsonschema.validators.validator_for(schema)
            validator_cls.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ConfigurationSchemaError(
                f"Invalid JSON schema: {e.message}",
                schema_errors=[e.message]
            ) from e

        errors = sorted(
            validator_cls(schema).iter_errors(config),
            key=lambda error: [str(p) for p in error.absolute_path]
        )
        if not errors:
            self.logger.debug("Configuration passed schema validation")
            return True

        validation_errors = []
        invalid_fields = []
        for error in errors:
            field_path = ".".join(str(p) for p in error.absolute_path)
            validation_errors.append(f"{field_path}: {error.message}" if field_path else error.message)
            if field_path:
                invalid_fields.append(field_path)

        raise ConfigurationValidationError(
            f"Configuration validation failed: {errors[0].message}",
            config_file,
            validation_errors,
            invalid_fields
        )
