'''
Created on 14-Nov-2024

@author: bibin
'''
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC

from parabank.models import AccountType
from .base_page import BasePage

class NewAccountPage(BasePage):
    PAGE_PATH = "openaccount.htm"
    ACCOUNT_TYPE_SELECT = (By.ID, "type")
    FROM_ACCOUNT_SELECT = (By.ID, "fromAccountId")
    OPEN_ACCOUNT_BUTTON = (By.XPATH, "//input[@value='Open New Account']")
    RESULT_PANEL = (By.ID, "openAccountResult")
    NEW_ACCOUNT_ID = (By.ID, "newAccountId")
    ERROR_PANEL = (By.ID, "openAccountError")
    ERROR_MESSAGE = (By.CSS_SELECTOR, "#openAccountError p.error")

    def open_new_account(self, account_type, from_account_id):
        self.select_by_value(self.ACCOUNT_TYPE_SELECT, AccountType(account_type).code)
        self.select_by_value(self.FROM_ACCOUNT_SELECT, from_account_id)
        self.click_element(self.OPEN_ACCOUNT_BUTTON)
        self.wait.until(EC.any_of(
            EC.visibility_of_element_located(self.RESULT_PANEL),
            EC.visibility_of_element_located(self.ERROR_PANEL),
        ))
        if self.is_visible(self.ERROR_PANEL, timeout=1):
            raise AssertionError(f"Failed to open account: {self.get_error_message()}")
        return self.wait_for_visible(self.NEW_ACCOUNT_ID).text.strip()

    def is_account_created(self):
        return self.is_visible(self.RESULT_PANEL)

    def get_error_message(self):
        return self.get_text(self.ERROR_MESSAGE)
