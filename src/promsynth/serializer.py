"""
Serialization of entities to YAML (and JSON for dashboards).

    from promsynth.serializer import serialize, serialize_to_file

    data = serialize(rule_file)
    serialize_to_file(alertmanager_config, "out/alertmanager.yml")

Keys keep the declaration order of the entity fields.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Type, TypeVar

import structlog
import yaml

from promsynth.config import DEFAULT_SETTINGS, SerializerSettings
from promsynth.core.duration import Duration
from promsynth.core.errors import FileWriteError, SerializationError
from promsynth.core.matcher import Matcher
from promsynth.core.projection import Projectable, encode
from promsynth.core.secret import Secret

logger = structlog.get_logger()

T = TypeVar("T", bound=Projectable)


class ConfigDumper(yaml.SafeDumper):
    """SafeDumper that knows promsynth scalars."""


class LiteralDumper(ConfigDumper):
    """ConfigDumper that writes multi-line strings as ``|`` blocks."""


def _represent_wire(dumper: yaml.SafeDumper, value: Any) -> yaml.Node:
    return dumper.represent_str(value.to_wire())


def _represent_literal(dumper: yaml.SafeDumper, value: str) -> yaml.Node:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


for _type in (Duration, Matcher, Secret):
    ConfigDumper.add_representer(_type, _represent_wire)
LiteralDumper.add_representer(str, _represent_literal)


def to_data(entity: Any) -> Any:
    """Project an entity (or plain data containing entities) to plain data."""
    if isinstance(entity, Projectable):
        return entity.to_dict()
    return encode(entity, "snake")


def dump_yaml(data: Any, settings: SerializerSettings | None = None) -> str:
    settings = settings or DEFAULT_SETTINGS
    dumper = LiteralDumper if settings.literal_multiline else ConfigDumper
    return yaml.dump(
        data,
        Dumper=dumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=settings.yaml_width,
    )


def serialize(entity: Any, settings: SerializerSettings | None = None) -> bytes:
    """Serialize an entity to canonical YAML bytes."""
    kind = type(entity).__name__
    try:
        text = dump_yaml(to_data(entity), settings)
    except yaml.YAMLError as e:
        logger.error("serialization_failed", kind=kind, error=str(e))
        raise SerializationError(f"Cannot serialize {kind}: {e}", {"kind": kind}) from e
    except RecursionError as e:
        logger.error("serialization_failed", kind=kind, error="recursion")
        raise SerializationError(f"Cannot serialize {kind}: cyclic graph", {"kind": kind}) from e

    data = text.encode("utf-8")
    logger.debug("serialized", kind=kind, size=len(data))
    return data


def serialize_to_file(
    entity: Any,
    path: str | Path,
    settings: SerializerSettings | None = None,
) -> None:
    """Serialize an entity and write it to ``path``.

    The file mode is applied explicitly so the result does not depend on the
    process umask. Missing parent directories are created unless disabled in
    the settings.
    """
    settings = settings or DEFAULT_SETTINGS
    data = serialize(entity, settings)
    write_bytes(data, path, settings)


def write_bytes(data: bytes, path: str | Path, settings: SerializerSettings | None = None) -> None:
    settings = settings or DEFAULT_SETTINGS
    target = Path(path)
    try:
        if settings.create_parents:
            target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        os.chmod(target, settings.file_mode)
    except OSError as e:
        logger.error("write_failed", path=str(target), error=str(e))
        raise FileWriteError(
            f"Cannot write {target}: {e.strerror or e}", {"path": str(target)}
        ) from e

    logger.info("wrote_file", path=str(target), size=len(data), mode=oct(settings.file_mode))


def must_serialize(entity: Any, settings: SerializerSettings | None = None) -> bytes:
    """Serialize or fail loudly; for build scripts where failure is a bug."""
    try:
        return serialize(entity, settings)
    except SerializationError as e:
        logger.critical("must_serialize_failed", kind=type(entity).__name__, error=e.message)
        raise RuntimeError(f"must_serialize: {e.message}") from e


def to_json(entity: Any, settings: SerializerSettings | None = None) -> str:
    """Render an entity as pretty-printed JSON."""
    settings = settings or DEFAULT_SETTINGS
    data = entity.to_dict() if hasattr(entity, "to_dict") else to_data(entity)
    try:
        return json.dumps(data, indent=settings.json_indent)
    except (TypeError, ValueError) as e:
        raise SerializationError(
            f"Cannot encode {type(entity).__name__} as JSON: {e}",
            {"kind": type(entity).__name__},
        ) from e


def parse(cls: Type[T], data: str | bytes) -> T:
    """Parse YAML text into an entity of type ``cls``."""
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    try:
        loaded = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise SerializationError(
            f"Invalid YAML for {cls.__name__}: {e}", {"kind": cls.__name__}
        ) from e
    return cls.from_dict(loaded)


def load_file(cls: Type[T], path: str | Path) -> T:
    """Read and parse a YAML file into an entity of type ``cls``."""
    target = Path(path)
    return parse(cls, target.read_bytes())
