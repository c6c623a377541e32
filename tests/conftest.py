"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fastapi.testclient import TestClient

from propscope.main import app
from propscope.calculations.properties import (
    GlobalSettings,
    MaintenanceCharge,
    Property,
    RentalAssumption,
)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def settings():
    """Default assumptions used throughout the projection tests."""
    return GlobalSettings(
        interest_rate=4.5,
        loan_tenure=35,
        management_fee_percent=12,
        maintenance_fee_psf=0.33,
        lppsa_interest_rate=4.0,
        airbnb_operator_fee_percent=20,
        rental_assumptions=[
            RentalAssumption(type="3 Bedrooms", rent=2500),
            RentalAssumption(type="2 Bedrooms", rent=2000),
            RentalAssumption(type="Studio", rent=1500),
        ],
    )


@pytest.fixture
def sample_property():
    """A 1,000 sqft unit with a manually entered maintenance charge."""
    return Property(
        id=1,
        type="Type A",
        bedrooms_type="3 Bedrooms",
        size=1000,
        spa_price=500000,
        valuation_psf=500,
        net_psf=480,
        whole_unit_rental=2500,
        co_living_rental=3000,
        airbnb_rental_per_night=200,
        maintenance=MaintenanceCharge(computed_default=330.0, override=350.0),
        wifi=0,
    )
