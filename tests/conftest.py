from datetime import date

import pytest

from ytmlib.bond import BondTerms


@pytest.fixture
def evaluation_date():
    return date(2024, 1, 15)


@pytest.fixture
def monthly_terms():
    """9% monthly-pay bond, two years from the evaluation date."""
    return BondTerms(
        face_value=1000.0,
        market_price=994.0,
        coupon_rate=9.0,
        coupon_frequency=12,
        maturity_date=date(2026, 1, 15),
    )
