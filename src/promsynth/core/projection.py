"""
Dataclass projection to and from plain mappings.

Every schema entity in promsynth is a ``@dataclass`` that mixes in
:class:`Projectable`. The mixin walks the dataclass fields in declaration
order and produces the plain ``dict``/``list``/``str`` tree that the YAML and
JSON encoders consume, and rebuilds entities from such trees using the
field type hints.

Key naming is decided per layer rather than per field: the Prometheus and
Alertmanager files use ``snake_case`` keys, the Prometheus Operator CRDs use
``camelCase``. A class may pin its style through ``key_style``; classes that
leave it unset inherit the style of the entity that contains them, which is
how ``RelabelConfig`` renders as ``source_labels`` in ``prometheus.yml`` and
as ``sourceLabels`` inside a ServiceMonitor.

Omission rules:
    - ``None`` is never emitted.
    - Fields annotated ``Optional[...]`` are emitted whenever they are not
      ``None``, so ``False`` and ``0`` survive (``send_resolved: false``).
    - Other fields are omitted while zero-valued ("", 0, False, [], {},
      zero duration) unless they have no default or are marked ``always``.
"""

from __future__ import annotations

import dataclasses
import enum
import functools
import types
from datetime import timedelta
from collections.abc import Mapping
from pathlib import Path
from typing import (
    Any,
    ClassVar,
    Dict,
    Optional,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

import structlog

from promsynth.core.errors import SerializationError

logger = structlog.get_logger()

SNAKE = "snake"
CAMEL = "camel"

T = TypeVar("T", bound="Projectable")


def attr(
    *,
    key: str | None = None,
    camel: str | None = None,
    always: bool = False,
    **kwargs: Any,
) -> Any:
    """Declare a dataclass field with projection metadata.

    Args:
        key: wire key used in every style (e.g. ``"class"``)
        camel: wire key used only in camel style (e.g. ``"apiURL"``)
        always: emit the field even when it is zero-valued
    """
    metadata = {"key": key, "camel": camel, "always": always}
    return dataclasses.field(metadata=metadata, **kwargs)


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def wire_key(field: dataclasses.Field, style: str) -> str:
    """Return the mapping key a field projects to under ``style``."""
    meta = field.metadata
    base = meta.get("key") or field.name.rstrip("_")
    if style == CAMEL:
        return meta.get("camel") or to_camel(base)
    return base


@functools.lru_cache(maxsize=None)
def _hints(cls: type) -> Dict[str, Any]:
    return get_type_hints(cls)


def _is_optional(tp: Any) -> bool:
    return get_origin(tp) in (Union, types.UnionType) and type(None) in get_args(tp)


def _is_required(field: dataclasses.Field) -> bool:
    return (
        field.default is dataclasses.MISSING
        and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
    )


def is_empty(value: Any) -> bool:
    """Zero-value test used for omission."""
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    is_zero = getattr(value, "is_zero", None)
    if callable(is_zero):
        return is_zero()
    return False


def encode(value: Any, style: str) -> Any:
    """Convert a value to plain YAML/JSON data under ``style``."""
    if isinstance(value, Projectable):
        return value.to_dict(style)
    to_wire = getattr(value, "to_wire", None)
    if callable(to_wire):
        return to_wire(style)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [encode(item, style) for item in value]
    if isinstance(value, dict):
        return {str(k): encode(v, style) for k, v in value.items()}
    return value


def _coerce(tp: Any, value: Any) -> Any:
    """Turn strings given for wire-typed fields (Duration, Matcher, Secret) into values."""
    if value is None or tp is None:
        return value
    if _is_optional(tp):
        members = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(members) != 1:
            return value
        tp = members[0]
    if get_origin(tp) is list and isinstance(value, list):
        args = get_args(tp)
        item_type = args[0] if args else Any
        items = [_coerce(item_type, item) for item in value]
        if any(new is not old for new, old in zip(items, value)):
            return items
        return value
    if isinstance(tp, type) and not isinstance(value, tp):
        from_wire = getattr(tp, "from_wire", None)
        if callable(from_wire) and isinstance(value, (str, timedelta)):
            return from_wire(value)
    return value


def decode(tp: Any, value: Any, style: str) -> Any:
    """Convert plain data back to the Python type ``tp``."""
    if value is None:
        return None

    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        members = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(members) == 1:
            return decode(members[0], value, style)
        # Multi-member unions are resolved by the owning class.
        return value
    if origin in (list, tuple):
        args = get_args(tp)
        item_type = args[0] if args else Any
        items = [decode(item_type, item, style) for item in value]
        return items if origin is list else tuple(items)
    if origin is dict:
        args = get_args(tp)
        value_type = args[1] if args else Any
        return {str(k): decode(value_type, v, style) for k, v in value.items()}

    if not isinstance(tp, type):
        return value
    if issubclass(tp, Projectable):
        return tp.from_dict(value, style)
    from_wire = getattr(tp, "from_wire", None)
    if callable(from_wire):
        return from_wire(value, style)
    if issubclass(tp, enum.Enum):
        return tp(value)
    if tp is str and isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if tp is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value


class Projectable:
    """
    Mixin for dataclasses that project to YAML/JSON mappings.

    Subclasses set ``key_style`` to pin their key naming; ``None`` inherits
    from the enclosing entity and defaults to snake_case at the root.
    """

    key_style: ClassVar[Optional[str]] = None

    def __post_init__(self) -> None:
        hints = _hints(type(self))
        for field in dataclasses.fields(self):  # type: ignore[arg-type]
            value = getattr(self, field.name)
            coerced = _coerce(hints.get(field.name), value)
            if coerced is not value:
                object.__setattr__(self, field.name, coerced)

    def _style(self, style: str | None) -> str:
        return self.key_style or style or SNAKE

    def to_dict(self, style: str | None = None) -> Dict[str, Any]:
        """Convert to a plain mapping in field declaration order."""
        effective = self._style(style)
        hints = _hints(type(self))
        result: Dict[str, Any] = {}
        for field in dataclasses.fields(self):  # type: ignore[arg-type]
            value = getattr(self, field.name)
            if value is None:
                continue
            keep = (
                field.metadata.get("always")
                or _is_required(field)
                or _is_optional(hints.get(field.name))
            )
            if not keep and is_empty(value):
                continue
            result[wire_key(field, effective)] = encode(value, effective)
        return result

    @classmethod
    def from_dict(cls: Type[T], data: Any, style: str | None = None) -> T:
        """Rebuild an entity from a plain mapping."""
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise SerializationError(
                f"Expected a mapping for {cls.__name__}",
                {"got": type(data).__name__},
            )

        effective = cls.key_style or style or SNAKE
        hints = _hints(cls)
        kwargs: Dict[str, Any] = {}
        known = set()
        for field in dataclasses.fields(cls):  # type: ignore[arg-type]
            if not field.init:
                continue
            key = wire_key(field, effective)
            known.add(key)
            if data.get(key) is None:
                continue
            kwargs[field.name] = decode(hints[field.name], data[key], effective)

        unknown = sorted(str(k) for k in data if k not in known)
        if unknown:
            logger.debug("ignored_unknown_keys", entity=cls.__name__, keys=unknown)

        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Cannot build {cls.__name__} from mapping: {e}",
                {"entity": cls.__name__},
            ) from e

    def to_yaml(self) -> str:
        """Render as a YAML document."""
        from promsynth.serializer import serialize

        return serialize(self).decode("utf-8")

    def serialize(self, settings: Any = None) -> bytes:
        from promsynth.serializer import serialize

        return serialize(self, settings)

    def serialize_to_file(self, path: str | Path, settings: Any = None) -> None:
        from promsynth.serializer import serialize_to_file

        serialize_to_file(self, path, settings)

    def must_serialize(self) -> bytes:
        from promsynth.serializer import must_serialize

        return must_serialize(self)

    @classmethod
    def parse(cls: Type[T], data: str | bytes) -> T:
        """Parse a YAML document produced by :meth:`serialize`."""
        from promsynth.serializer import parse

        return parse(cls, data)
