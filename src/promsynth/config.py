"""
Serializer settings.

Settings are passed explicitly to the serializer; nothing is read from the
environment.
"""

from pydantic import BaseModel, Field, field_validator


class SerializerSettings(BaseModel):
    """Options controlling how entities are written out."""

    file_mode: int = Field(0o644, description="Permission bits applied to written files")
    create_parents: bool = Field(True, description="Create missing parent directories")
    json_indent: int = Field(2, ge=0, description="Indentation for JSON output")
    yaml_width: int = Field(4096, gt=20, description="Line width before YAML folds scalars")
    literal_multiline: bool = Field(
        True, description="Emit multi-line strings in YAML literal block style"
    )

    @field_validator("file_mode")
    @classmethod
    def _check_mode(cls, value: int) -> int:
        if not 0 <= value <= 0o777:
            raise ValueError(f"file_mode must be within 0o000-0o777, got {oct(value)}")
        return value


DEFAULT_SETTINGS = SerializerSettings()
