"""
Constraint specification model.

A configuration entry declares what values it accepts through a
specification tagged by ``data_type``. Each variant only carries the
constraint fields that are meaningful for it, so a number range can never
be attached to a text entry by accident.

Authoring-time invariants (checked on construction):
- number: minimum must not exceed maximum
- text: pattern must compile and every allowed value must match it in full
- boolean: allowed values must be a subset of {true, false}

Violating one raises MalformedSpecificationError directly. Field type errors
(e.g. a non-numeric minimum) surface as pydantic ValidationError, which
parse_specification() converts into MalformedSpecificationError as well.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator

from modules.validation import checkers
from modules.validation.core.exceptions import MalformedSpecificationError


class DataType(str, Enum):
    """Data types a configuration entry may declare"""
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"


# Pattern presets offered when authoring a text specification
REGEX_PRESETS: Dict[str, Dict[str, str]] = {
    "letters_spaces": {"label": "Letters and spaces only", "pattern": r"^[A-Za-zÁÉÍÓÚáéíóúñÑ ]+$", "example": "Juan Pérez"},
    "alphanumeric": {"label": "Alphanumeric text", "pattern": r"^[A-Za-z0-9 ]+$", "example": "Usuario123 Test"},
    "code_format": {"label": "Code without spaces (letters, digits, dash, underscore)", "pattern": r"^[A-Za-z0-9_-]+$", "example": "codigo-123_v2"},
    "positive_int": {"label": "Positive integer", "pattern": r"^[0-9]+$", "example": "12345"},
    "int_signed": {"label": "Signed integer", "pattern": r"^-?[0-9]+$", "example": "-500"},
    "decimal": {"label": "Decimal with dot", "pattern": r"^[0-9]+(\.[0-9]+)?$", "example": "123.45"},
    "date_iso": {"label": "Date YYYY-MM-DD", "pattern": r"^\d{4}-\d{2}-\d{2}$", "example": "2025-11-30"},
    "date_dmyslash": {"label": "Date DD/MM/YYYY", "pattern": r"^\d{2}/\d{2}/\d{4}$", "example": "30/11/2025"},
    "time_24h": {"label": "Time HH:MM (24h)", "pattern": r"^([01]\d|2[0-3]):[0-5]\d$", "example": "14:30"},
    "email": {"label": "Email address", "pattern": r"^[^\s@]+@[^\s@]+\.[^\s@]+$", "example": "usuario@example.com"},
    "password": {"label": "Password (8+ chars, upper, lower, digit)", "pattern": r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,}$", "example": "Password123"},
}

# Keys sent by the administrative console
_CONSOLE_KEYS = {
    "dataType": "data_type",
    "minimumValue": "minimum",
    "maximumValue": "maximum",
    "allowedValues": "allowed_values",
    "validationPattern": "pattern",
    "isEditable": "is_editable",
    "requiresRestart": "requires_restart",
    "isSensitive": "is_sensitive",
}


class _SpecificationBase(BaseModel):
    """Metadata flags shared by every variant; none of them affect validation."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_editable: bool = True
    requires_restart: bool = False
    is_sensitive: bool = False

    def problems(self) -> List[str]:
        """Structural problems with this specification (empty when well formed)"""
        return []

    @model_validator(mode="after")
    def _check_well_formed(self):
        problems = self.problems()
        if problems:
            raise MalformedSpecificationError("; ".join(problems), problems)
        return self


class TextSpecification(_SpecificationBase):
    data_type: Literal["text"] = "text"
    pattern: Optional[str] = None
    allowed_values: List[str] = Field(default_factory=list)

    def problems(self) -> List[str]:
        if not self.pattern:
            return []
        if checkers.compile_pattern(self.pattern) is None:
            return [f"Validation pattern '{self.pattern}' is not a valid regular expression"]
        return [
            f"Allowed value '{value}' does not match pattern '{self.pattern}'"
            for value in self.allowed_values
            if not checkers.full_match(self.pattern, value)
        ]

    @classmethod
    def from_preset(cls, preset: str, **kwargs: Any) -> "TextSpecification":
        """
        Build a text specification from a named pattern preset.

        Raises:
            MalformedSpecificationError: If the preset name is unknown
        """
        if preset not in REGEX_PRESETS:
            raise MalformedSpecificationError(f"Unknown pattern preset: {preset}")
        return cls(pattern=REGEX_PRESETS[preset]["pattern"], **kwargs)


class NumberSpecification(_SpecificationBase):
    data_type: Literal["number"] = "number"
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    allowed_values: List[float] = Field(default_factory=list)

    def problems(self) -> List[str]:
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            return [f"Minimum {self.minimum:g} is greater than maximum {self.maximum:g}"]
        return []


class BooleanSpecification(_SpecificationBase):
    data_type: Literal["boolean"] = "boolean"
    allowed_values: List[bool] = Field(default_factory=list)

    @field_validator("allowed_values", mode="before")
    @classmethod
    def _only_boolean_literals(cls, values: Any) -> Any:
        if not isinstance(values, (list, tuple)):
            return values
        parsed = [checkers.parse_boolean(v) for v in values]
        bad = [v for v, p in zip(values, parsed) if p is None]
        if bad:
            raise MalformedSpecificationError(
                f"Allowed values for a boolean must be true or false, got {bad}"
            )
        return parsed

    def problems(self) -> List[str]:
        return [
            f"Allowed value {value!r} is not a boolean"
            for value in self.allowed_values
            if not isinstance(value, bool)
        ]


ConstraintSpecification = Annotated[
    Union[TextSpecification, NumberSpecification, BooleanSpecification],
    Field(discriminator="data_type"),
]

_SPECIFICATION_ADAPTER = TypeAdapter(ConstraintSpecification)

_VARIANTS = {
    DataType.TEXT: TextSpecification,
    DataType.NUMBER: NumberSpecification,
    DataType.BOOLEAN: BooleanSpecification,
}


def _normalize_keys(raw: Mapping[str, Any]) -> Dict[str, Any]:
    data: Dict[str, Any] = {}
    for key, value in raw.items():
        key = _CONSOLE_KEYS.get(key, key)
        # Empty form inputs mean "not set"
        if key in ("minimum", "maximum", "pattern") and value == "":
            value = None
        data[key] = value

    data_type = data.get("data_type")
    if isinstance(data_type, DataType):
        data["data_type"] = data_type.value
    elif isinstance(data_type, str):
        data_type = data_type.strip().lower()
        # The console calls text entries "string"
        data["data_type"] = "text" if data_type == "string" else data_type
    return data


def parse_specification(raw: Mapping[str, Any]) -> ConstraintSpecification:
    """
    Build a specification from a raw mapping.

    Accepts both snake_case keys and the console's camelCase keys
    (dataType, minimumValue, allowedValues, validationPattern, ...).
    The console always sends every constraint field; fields that belong to
    another variant are dropped when empty and rejected otherwise.

    Raises:
        MalformedSpecificationError: For an unrecognized data type, badly
            typed constraint fields or a broken authoring invariant
    """
    data = _normalize_keys(raw)
    if data.get("data_type") not in {dt.value for dt in DataType}:
        raise MalformedSpecificationError(f"Unrecognized data type: {data.get('data_type')!r}")

    variant = _VARIANTS[DataType(data["data_type"])]
    data = {
        key: value for key, value in data.items()
        if key in variant.model_fields or value not in (None, "", [])
    }

    try:
        return _SPECIFICATION_ADAPTER.validate_python(data)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise MalformedSpecificationError("; ".join(problems), problems) from e


def specification_problems(spec: Any) -> List[str]:
    """
    Re-check a specification that may have bypassed construction checks
    (e.g. built with ``model_construct``).
    """
    if not isinstance(spec, tuple(_VARIANTS.values())):
        data_type = getattr(spec, "data_type", spec)
        return [f"Unrecognized data type: {data_type!r}"]
    if spec.data_type not in {dt.value for dt in DataType}:
        return [f"Unrecognized data type: {spec.data_type!r}"]
    return spec.problems()


def ensure_well_formed(spec: Any) -> None:
    """
    Raises:
        MalformedSpecificationError: If the specification is structurally invalid
    """
    problems = specification_problems(spec)
    if problems:
        raise MalformedSpecificationError("; ".join(problems), problems)


def switch_data_type(spec: ConstraintSpecification, data_type: Union[DataType, str]) -> ConstraintSpecification:
    """
    Transition a specification to another data type.

    The metadata flags carry over; allowed values and every type-specific
    constraint are dropped, since they were expressed in the old type.
    Callers holding a value for the old type must clear it too
    (ConfigurationEntry.with_data_type does both).
    """
    try:
        target = DataType(data_type)
    except ValueError:
        raise MalformedSpecificationError(f"Unrecognized data type: {data_type!r}")

    return _VARIANTS[target](
        is_editable=spec.is_editable,
        requires_restart=spec.requires_restart,
        is_sensitive=spec.is_sensitive,
    )
