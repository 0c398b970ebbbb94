"""Parameter binding for capability instantiation.

Raw parameters always arrive as text, whether they came from CLI flags or an
HTTP request body. :class:`ParameterBinder` coerces them against the
parameter schema a capability declares and produces a :class:`TypedConfig`.

Binding rules:
    - names in the schema are coerced to the declared primitive type;
      a failed coercion raises ``ValidationError`` naming the parameter
    - schema parameters missing from the input get their declared default,
      or stay unset when there is none
    - names unknown to the schema are passed through untouched
    - a repeated name keeps its last value

Tags:
    capplane, capabilities, params, validation, coercion
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from capplane.core.errors import ValidationError
from capplane.core.models import CapabilityDefinition, ParameterSpec, ParamType, TypedConfig


@dataclass(frozen=True, slots=True)
class RawParam:
    """One name/value pair as received from a transport."""

    name: str
    value: str


# =============================================================================
# Built-in Coercers
# =============================================================================

_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
_FALSE_VALUES = frozenset({"false", "no", "off", "0"})


def _to_string(raw: str) -> str:
    return raw


def _to_int(raw: str) -> int:
    return int(raw.strip())


def _to_float(raw: str) -> float:
    return float(raw.strip())


def _to_bool(raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


_COERCERS: dict[ParamType, Callable[[str], Any]] = {
    ParamType.STRING: _to_string,
    ParamType.INT: _to_int,
    ParamType.FLOAT: _to_float,
    ParamType.BOOL: _to_bool,
}


def coerce_value(spec: ParameterSpec, raw: Any) -> Any:
    """Coerce *raw* into the type declared by *spec*.

    Non-text input is stringified first, so ``8080`` and ``"8080"`` behave the
    same. Booleans are rendered lower-case before coercion.

    Raises:
        ValidationError: If the value cannot be represented as the declared type.
    """
    if isinstance(raw, bool):
        text = "true" if raw else "false"
    else:
        text = str(raw)

    try:
        return _COERCERS[spec.type](text)
    except ValueError as exc:
        raise ValidationError(
            spec.name,
            f"expected {spec.type.value}, got {text!r}",
            value=text,
            cause=exc,
        ) from exc


class ParameterBinder:
    """Bind raw name/value pairs against a capability's parameter schema."""

    def bind(self, capability: CapabilityDefinition, raw_params: Iterable[RawParam]) -> TypedConfig:
        """
        Build a typed configuration for *capability*.

        Args:
            capability: Definition whose ``parameters`` form the schema.
            raw_params: Incoming pairs, in input order.

        Returns:
            TypedConfig with typed schema values, passthrough options, and the
            names that were defaulted or left unset.

        Raises:
            ValidationError: On the first schema parameter whose value cannot
                be coerced.
        """
        schema = {spec.name: spec for spec in capability.parameters}

        supplied: dict[str, Any] = {}
        passthrough: dict[str, str] = {}
        for param in raw_params:
            spec = schema.get(param.name)
            if spec is None:
                passthrough[param.name] = param.value
                continue
            supplied[param.name] = coerce_value(spec, param.value)

        values: dict[str, Any] = {}
        unset: list[str] = []
        defaulted: set[str] = set()
        for spec in capability.parameters:
            if spec.name in supplied:
                values[spec.name] = supplied[spec.name]
            elif spec.default is not None:
                values[spec.name] = spec.default
                defaulted.add(spec.name)
            else:
                unset.append(spec.name)

        return TypedConfig(
            values=values,
            passthrough=passthrough,
            unset=tuple(unset),
            defaulted=frozenset(defaulted),
        )


def parse_assignments(pairs: Iterable[str]) -> list[RawParam]:
    """Parse ``key=value`` strings into :class:`RawParam` objects.

    Raises:
        ValidationError: If an entry has no ``=`` or an empty key.
    """
    params: list[RawParam] = []
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValidationError(pair, "expected key=value")
        params.append(RawParam(name=key, value=value))
    return params
