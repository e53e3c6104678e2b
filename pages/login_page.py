'''
Created on 02-Nov-2024

@author: bibin
'''
from selenium.webdriver.common.by import By
from .base_page import BasePage

class LoginPage(BasePage):
    PAGE_PATH = "index.htm"
    USERNAME_FIELD = (By.NAME, "username")
    PASSWORD_FIELD = (By.NAME, "password")
    LOGIN_BUTTON = (By.XPATH, "//input[@value='Log In']")
    LOGOUT_LINK = (By.LINK_TEXT, "Log Out")
    ERROR_MESSAGE = (By.CSS_SELECTOR, "#rightPanel p.error")
    REGISTER_LINK = (By.LINK_TEXT, "Register")
    ACCOUNT_OVERVIEW = "Accounts Overview"  # Used to check if the login was successful

    def login(self, username, password):
        self.input_text(self.USERNAME_FIELD, username)
        self.input_text(self.PASSWORD_FIELD, password)
        self.click_element(self.LOGIN_BUTTON)

    def is_login_successful(self):
        return self.is_visible(self.LOGOUT_LINK) and self.ACCOUNT_OVERVIEW in self.driver.page_source

    def has_login_error(self):
        return self.is_visible(self.ERROR_MESSAGE)

    def get_error_message(self):
        return self.get_text(self.ERROR_MESSAGE)

    def navigate_to_registration(self):
        self.click_element(self.REGISTER_LINK)

    def logout(self):
        self.click_element(self.LOGOUT_LINK)
