'''
Created on 14-Nov-2024

@author: bibin
'''
import logging

from selenium.webdriver.common.by import By
from .base_page import BasePage

logger = logging.getLogger(__name__)

class RegistrationPage(BasePage):
    PAGE_PATH = "register.htm"
    FIRST_NAME_FIELD = (By.ID, "customer.firstName")
    LAST_NAME_FIELD = (By.ID, "customer.lastName")
    ADDRESS_FIELD = (By.ID, "customer.address.street")
    CITY_FIELD = (By.ID, "customer.address.city")
    STATE_FIELD = (By.ID, "customer.address.state")
    ZIP_CODE_FIELD = (By.ID, "customer.address.zipCode")
    PHONE_FIELD = (By.ID, "customer.phoneNumber")
    SSN_FIELD = (By.ID, "customer.ssn")
    USERNAME_FIELD = (By.ID, "customer.username")
    PASSWORD_FIELD = (By.ID, "customer.password")
    CONFIRM_PASSWORD_FIELD = (By.ID, "repeatedPassword")
    REGISTER_BUTTON = (By.XPATH, "//input[@value='Register']")
    WELCOME_TITLE = (By.CSS_SELECTOR, "#rightPanel h1.title")
    ERROR_MESSAGES = (By.CSS_SELECTOR, "span.error")

    def fill_registration_form(self, user):
        fields = [
            (self.FIRST_NAME_FIELD, "first_name"),
            (self.LAST_NAME_FIELD, "last_name"),
            (self.ADDRESS_FIELD, "address"),
            (self.CITY_FIELD, "city"),
            (self.STATE_FIELD, "state"),
            (self.ZIP_CODE_FIELD, "zip_code"),
            (self.PHONE_FIELD, "phone"),
            (self.SSN_FIELD, "ssn"),
            (self.USERNAME_FIELD, "username"),
            (self.PASSWORD_FIELD, "password"),
            (self.CONFIRM_PASSWORD_FIELD, "confirm_password"),
        ]
        for locator, key in fields:
            self.input_text(locator, user[key])

    def submit(self):
        self.click_element(self.REGISTER_BUTTON)

    def register_user(self, user):
        self.fill_registration_form(user)
        self.submit()
        return self.is_registration_successful(user["username"])

    def is_registration_successful(self, username=None):
        if not self.is_visible(self.WELCOME_TITLE):
            return False
        message = self.get_text(self.WELCOME_TITLE)
        logger.info("Registration result message: %s", message)
        if "Welcome" not in message:
            return False
        return username is None or username in message

    def get_error_messages(self):
        return [e.text.strip() for e in self.find_elements(self.ERROR_MESSAGES) if e.text.strip()]
