"""
Shared fixtures for validation tests.
"""

import pytest

from modules.validation import CategoryRecord, SupplierRecord, ValidationEngine


class FakeLookup:
    """In-memory stand-in for the record-lookup collaborator."""

    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error
        self.calls = 0

    async def fetch_all(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)


@pytest.fixture
def engine():
    return ValidationEngine()


@pytest.fixture
def root_category():
    return CategoryRecord(
        id="cat-1",
        name="Vehiculos",
        description="Vehiculos de uso municipal",
        level=1,
        accounting_account="1503",
        annual_depreciation_pct=20,
        useful_life_years=5,
        residual_value_pct=10,
    )


@pytest.fixture
def valid_supplier():
    return SupplierRecord(
        id=7,
        document_kind="tax_id",
        document_number="20100070970",
        legal_name="Distribuidora Andina S.A.C.",
        trade_name="Andina",
        address="Av. Grau 123, Lima",
        phone="987 654 321",
        email="ventas@andina.com.pe",
        main_contact="Rosa Quispe",
        website="www.andina.com.pe",
        qualification=4,
    )


@pytest.fixture
def fake_lookup():
    return FakeLookup
