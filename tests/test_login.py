import pytest
import allure
from pages.login_page import LoginPage

pytestmark = pytest.mark.e2e

@allure.feature("Login Feature")
@allure.story("User logs in successfully")
def test_login_to_parabank(driver, login_driver, registered_user):
    login_page = LoginPage(login_driver)

    with allure.step("Open ParaBank login page"):
        login_page.open()

    with allure.step("Enter login credentials and submit"):
        login_page.login(registered_user["username"], registered_user["password"])

    with allure.step("Verify login success"):
        assert login_page.is_login_successful(), "Login failed - Accounts Overview page not found"
        assert "overview.htm" in login_driver.current_url
        allure.attach(login_driver.get_screenshot_as_png(), name="LoginSuccess", attachment_type=allure.attachment_type.PNG)

@allure.feature("Login Feature")
@allure.story("User logs out")
def test_logout_returns_to_login_form(login_driver, registered_user):
    login_page = LoginPage(login_driver).open()
    login_page.login(registered_user["username"], registered_user["password"])
    assert login_page.is_login_successful()

    with allure.step("Log out"):
        login_page.logout()

    with allure.step("Verify the login form is shown again"):
        assert login_page.is_visible(LoginPage.USERNAME_FIELD)
        assert not login_page.is_present(LoginPage.LOGOUT_LINK)

@allure.feature("Login Feature")
@allure.story("Invalid credentials are rejected")
def test_login_with_invalid_credentials(driver):
    login_page = LoginPage(driver).open()

    with allure.step("Submit unknown credentials"):
        login_page.login("invalid_user", "invalid_password")

    with allure.step("Verify error message"):
        assert login_page.has_login_error(), "Error message should be displayed for invalid login"
        assert login_page.get_error_message() == "The username and password could not be verified."

@allure.feature("Login Feature")
@allure.story("Empty credentials are rejected")
@pytest.mark.parametrize("username, password", [("", ""), ("", "Password123"), ("validUsername", "")])
def test_login_with_missing_credentials(driver, username, password):
    login_page = LoginPage(driver).open()

    with allure.step("Submit the login form with a blank field"):
        login_page.login(username, password)

    with allure.step("Verify error message"):
        assert login_page.has_login_error(), "Error message should be displayed for empty credentials"
        assert login_page.get_error_message() == "Please enter a username and password."
