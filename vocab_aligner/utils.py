"""
Utility functions for the vocabulary aligner.
"""

from enum import Enum
from typing import Type, TypeVar, Union

from .errors import ConfigurationError

E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], value: Union[str, E], what: str) -> E:
    """Resolve an enum member from a member, its name or its value.

    Names are matched case-insensitively; "-" and " " are read as "_".
    Raises ConfigurationError for anything unrecognized.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        if key in enum_cls.__members__:
            return enum_cls.__members__[key]
        for member in enum_cls:
            if member.value == value.strip():
                return member
    choices = ", ".join(m.name.lower() for m in enum_cls)
    raise ConfigurationError(f"Unknown {what} '{value}' (expected one of: {choices})")


def check_unit_interval(value: float, what: str) -> float:
    """Reject values outside [0, 1]"""
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{what} must be a number, got {value!r}")
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{what} must be within [0, 1], got {value}")
    return value


def build_config_from_args(args):
    """Build RunConfig overrides from an argparse Namespace.

    Returns: dict of overrides (None values removed so defaults survive)
    """
    config = {
        "threshold": getattr(args, "threshold", None),
        "selection_type": getattr(args, "policy", None),
        "support_rule": getattr(args, "support_rule", None),
        "interactive": True if getattr(args, "interactive", False) else None,
    }

    # Remove None values to avoid overriding defaults
    return {k: v for k, v in config.items() if v is not None}
