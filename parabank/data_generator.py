"""Random but form-valid test data for ParaBank."""
import time
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Optional, Tuple, Union

from faker import Faker

from parabank.config import settings

fake = Faker("en_US")


def generate_unique_username(prefix: str = "user") -> str:
    # ParaBank usernames are global to the demo site; a clock suffix keeps reruns apart
    stamp = str(time.time_ns())[-8:]
    return f"{prefix}_{stamp}_{fake.pyint(100, 999)}"


def generate_phone_number() -> str:
    return f"{fake.pyint(100, 999)}-{fake.pyint(100, 999)}-{fake.pyint(1000, 9999)}"


def generate_ssn() -> str:
    return f"{fake.pyint(100, 999)}-{fake.pyint(10, 99)}-{fake.pyint(1000, 9999)}"


def generate_address() -> Dict[str, str]:
    return {
        "street": fake.street_address(),
        "city": fake.city(),
        "state": fake.state_abbr(),
        "zip_code": fake.numerify("#####"),
    }


def generate_amount(minimum: float = 10, maximum: float = 1000) -> str:
    """Dollar amount with two decimals, as a string."""
    value = fake.pyfloat(min_value=minimum, max_value=maximum, right_digits=2)
    return f"{value:.2f}"


def generate_user_data(username: Optional[str] = None, password: Optional[str] = None) -> Dict[str, str]:
    first_name = fake.first_name()
    password = password or settings.default_password
    address = generate_address()
    return {
        "first_name": first_name,
        "last_name": fake.last_name(),
        "address": address["street"],
        "city": address["city"],
        "state": address["state"],
        "zip_code": address["zip_code"],
        "phone": generate_phone_number(),
        "ssn": generate_ssn(),
        "username": username or generate_unique_username(first_name.lower()),
        "password": password,
        "confirm_password": password,
    }


def generate_payee_data() -> Dict[str, str]:
    address = generate_address()
    return {
        "name": fake.company(),
        "address": address["street"],
        "city": address["city"],
        "state": address["state"],
        "zip_code": address["zip_code"],
        "phone": generate_phone_number(),
        "account": str(fake.pyint(1000000, 9999999)),
    }


def format_currency(amount: Union[Decimal, float, str]) -> str:
    """``1234.5`` -> ``$1,234.50``; negative amounts render as ``-$12.00``."""
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def parse_currency(text: str) -> Decimal:
    """Inverse of :func:`format_currency`; tolerates surrounding whitespace."""
    cleaned = text.strip().replace("$", "").replace(",", "")
    return Decimal(cleaned)


def search_date_window(moment: datetime, slack_days: int = 1) -> Tuple[str, str]:
    """MM-DD-YYYY bounds around ``moment`` for the Find Transactions date range.

    API timestamps are UTC while the site renders dates in its own zone, so the
    calendar day can differ by one either way.
    """
    slack = timedelta(days=slack_days)
    return f"{moment - slack:%m-%d-%Y}", f"{moment + slack:%m-%d-%Y}"
