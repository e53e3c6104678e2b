"""Browser flows shared by tests and the scenario setup."""
import logging
from typing import Dict, Optional

from selenium.common.exceptions import TimeoutException

from pages.accounts_overview_page import AccountsOverviewPage
from pages.login_page import LoginPage
from pages.registration_page import RegistrationPage
from parabank.data_generator import generate_user_data

logger = logging.getLogger(__name__)


def register_new_user(driver, user: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Register ``user`` (or a freshly generated one) and return its data."""
    user = user or generate_user_data()
    logger.info("Registering user %s", user["username"])
    page = RegistrationPage(driver).open()
    if not page.register_user(user):
        raise AssertionError(f"Registration failed for {user['username']}: {page.get_error_messages()}")
    return user


def login_user(driver, username: str, password: str) -> LoginPage:
    page = LoginPage(driver).open()
    page.login(username, password)
    if not page.is_login_successful():
        raise AssertionError(f"Login failed for {username}")
    logger.info("Logged in through the browser as %s", username)
    return page


def first_account_id(driver) -> Optional[int]:
    """First account listed on the overview page, or ``None`` if the table stays empty."""
    try:
        ids = AccountsOverviewPage(driver).open().get_account_ids()
    except TimeoutException:
        return None
    return int(ids[0]) if ids else None
