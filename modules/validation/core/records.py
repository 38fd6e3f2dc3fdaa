"""
Record schemas submitted for validation.

Every constraint field is optional so an incomplete form submission can
still be validated and reported field by field; missing values surface as
MISSING_REQUIRED violations instead of construction errors.
"""

from enum import Enum
from typing import Any, ClassVar, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from modules.validation.core.specification import ConstraintSpecification, DataType, parse_specification, switch_data_type


RecordId = Union[int, str]

# Numeric form inputs may arrive as text; validators parse them
FormNumber = Union[int, float, str]


class DocumentKind(str, Enum):
    """Identity document kinds accepted for suppliers"""
    TAX_ID = "tax_id"                                # RUC
    NATIONAL_ID = "national_id"                      # DNI
    FOREIGN_RESIDENT_CARD = "foreign_resident_card"  # CE
    PASSPORT = "passport"

    @property
    def label(self) -> str:
        return _DOCUMENT_LABELS[self]

    @classmethod
    def _missing_(cls, value: Any):
        # Console type ids (1-4) and the usual local abbreviations
        if isinstance(value, int) and not isinstance(value, bool):
            return _DOCUMENT_TYPE_IDS.get(value)
        if isinstance(value, str):
            return _DOCUMENT_ALIASES.get(value.strip().replace(" ", "").replace("_", "").lower())
        return None


_DOCUMENT_LABELS = {
    DocumentKind.TAX_ID: "RUC",
    DocumentKind.NATIONAL_ID: "DNI",
    DocumentKind.FOREIGN_RESIDENT_CARD: "CE",
    DocumentKind.PASSPORT: "Passport",
}

_DOCUMENT_TYPE_IDS = {
    1: DocumentKind.TAX_ID,
    2: DocumentKind.NATIONAL_ID,
    3: DocumentKind.FOREIGN_RESIDENT_CARD,
    4: DocumentKind.PASSPORT,
}

_DOCUMENT_ALIASES = {
    "taxid": DocumentKind.TAX_ID,
    "ruc": DocumentKind.TAX_ID,
    "nationalid": DocumentKind.NATIONAL_ID,
    "dni": DocumentKind.NATIONAL_ID,
    "foreignresidentcard": DocumentKind.FOREIGN_RESIDENT_CARD,
    "ce": DocumentKind.FOREIGN_RESIDENT_CARD,
    "passport": DocumentKind.PASSPORT,
    "pasaporte": DocumentKind.PASSPORT,
}


class ConfigurationEntry(BaseModel):
    """A row of the system configuration table"""

    record_type: ClassVar[str] = "configuration"
    model_config = ConfigDict(frozen=True)

    id: Optional[RecordId] = None
    category: Optional[str] = None
    key: Optional[str] = None
    value: Any = None
    description: Optional[str] = None
    specification: ConstraintSpecification

    @field_validator("specification", mode="before")
    @classmethod
    def _parse_raw_specification(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return parse_specification(value)
        return value

    def with_data_type(self, data_type: Union[DataType, str]) -> "ConfigurationEntry":
        """
        Switch the entry to another data type.

        Returns a copy whose specification is a fresh variant of the new
        type (allowed values cleared) and whose value is cleared.
        """
        return self.model_copy(update={
            "specification": switch_data_type(self.specification, data_type),
            "value": None,
        })


class SupplierRecord(BaseModel):
    """A supplier, identified by a national identity or tax document"""

    record_type: ClassVar[str] = "supplier"
    model_config = ConfigDict(frozen=True)

    id: Optional[RecordId] = None
    document_kind: Optional[DocumentKind] = None
    document_number: Optional[str] = None
    # Stored value when editing; an unchanged tax ID skips the check digit
    original_document_number: Optional[str] = None
    legal_name: Optional[str] = None
    trade_name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    main_contact: Optional[str] = None
    website: Optional[str] = None
    qualification: Optional[FormNumber] = None


class CategoryRecord(BaseModel):
    """An asset category, optionally nested under a parent category"""

    record_type: ClassVar[str] = "category"
    model_config = ConfigDict(frozen=True)

    id: Optional[RecordId] = None
    name: Optional[str] = None
    description: Optional[str] = None
    level: Optional[FormNumber] = None
    parent_id: Optional[RecordId] = None
    accounting_account: Optional[str] = None
    annual_depreciation_pct: Optional[FormNumber] = None
    useful_life_years: Optional[FormNumber] = None
    residual_value_pct: Optional[FormNumber] = None

    @field_validator("accounting_account", mode="before")
    @classmethod
    def _account_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class PositionRecord(BaseModel):
    """A job position within the municipality"""

    record_type: ClassVar[str] = "position"
    model_config = ConfigDict(frozen=True)

    id: Optional[RecordId] = None
    position_code: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    hierarchical_level: Optional[FormNumber] = None
    base_salary: Optional[FormNumber] = None
