'''
Created on 02-Nov-2024

@author: bibin
'''
from selenium.webdriver.common.by import By
from .base_page import BasePage

class TransferPage(BasePage):
    PAGE_PATH = "transfer.htm"
    TRANSFER_LINK = (By.LINK_TEXT, "Transfer Funds")
    AMOUNT_FIELD = (By.ID, "amount")
    FROM_ACCOUNT_SELECT = (By.ID, "fromAccountId")
    TO_ACCOUNT_SELECT = (By.ID, "toAccountId")
    TRANSFER_BUTTON = (By.XPATH, "//input[@value='Transfer']")
    SUCCESS_MESSAGE = (By.XPATH, "//div[@id='showResult']//h1[normalize-space()='Transfer Complete!']")
    AMOUNT_RESULT = (By.ID, "amountResult")
    FROM_ACCOUNT_RESULT = (By.ID, "fromAccountIdResult")
    TO_ACCOUNT_RESULT = (By.ID, "toAccountIdResult")
    ERROR_PANEL = (By.ID, "showError")

    def navigate_to_transfer_page(self):
        self.click_element(self.TRANSFER_LINK)

    def transfer_funds(self, amount, from_account_value, to_account_value):
        self.input_text(self.AMOUNT_FIELD, str(amount))
        self.select_by_value(self.FROM_ACCOUNT_SELECT, from_account_value)
        self.select_by_value(self.TO_ACCOUNT_SELECT, to_account_value)
        self.click_element(self.TRANSFER_BUTTON)

    def get_available_accounts(self):
        self.wait.until(lambda _: len(self.get_option_values(self.FROM_ACCOUNT_SELECT)) > 0)
        return self.get_option_values(self.FROM_ACCOUNT_SELECT)

    def is_transfer_successful(self):
        return self.is_visible(self.SUCCESS_MESSAGE)

    def get_transfer_details(self):
        return {
            "amount": self.get_text(self.AMOUNT_RESULT),
            "from_account_id": self.get_text(self.FROM_ACCOUNT_RESULT),
            "to_account_id": self.get_text(self.TO_ACCOUNT_RESULT),
        }

    def has_error(self):
        return self.is_visible(self.ERROR_PANEL, timeout=2)
