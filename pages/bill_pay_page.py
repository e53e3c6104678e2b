'''
Created on 14-Nov-2024

@author: bibin
'''
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from .base_page import BasePage

class BillPayPage(BasePage):
    PAGE_PATH = "billpay.htm"
    PAYEE_NAME_FIELD = (By.NAME, "payee.name")
    ADDRESS_FIELD = (By.NAME, "payee.address.street")
    CITY_FIELD = (By.NAME, "payee.address.city")
    STATE_FIELD = (By.NAME, "payee.address.state")
    ZIP_CODE_FIELD = (By.NAME, "payee.address.zipCode")
    PHONE_FIELD = (By.NAME, "payee.phoneNumber")
    ACCOUNT_FIELD = (By.NAME, "payee.accountNumber")
    VERIFY_ACCOUNT_FIELD = (By.NAME, "verifyAccount")
    AMOUNT_FIELD = (By.NAME, "amount")
    FROM_ACCOUNT_SELECT = (By.NAME, "fromAccountId")
    SEND_PAYMENT_BUTTON = (By.XPATH, "//input[@value='Send Payment']")
    RESULT_PANEL = (By.ID, "billpayResult")
    RESULT_PAYEE_NAME = (By.ID, "payeeName")
    RESULT_AMOUNT = (By.ID, "amount")
    RESULT_FROM_ACCOUNT = (By.ID, "fromAccountId")
    ERROR_PANEL = (By.ID, "billpayError")

    def fill_payee_information(self, payee):
        self.input_text(self.PAYEE_NAME_FIELD, payee["name"])
        self.input_text(self.ADDRESS_FIELD, payee["address"])
        self.input_text(self.CITY_FIELD, payee["city"])
        self.input_text(self.STATE_FIELD, payee["state"])
        self.input_text(self.ZIP_CODE_FIELD, payee["zip_code"])
        self.input_text(self.PHONE_FIELD, payee["phone"])
        self.input_text(self.ACCOUNT_FIELD, payee["account"])
        self.input_text(self.VERIFY_ACCOUNT_FIELD, payee["account"])

    def pay_bill(self, payee, amount, from_account_id):
        self.fill_payee_information(payee)
        self.input_text(self.AMOUNT_FIELD, str(amount))
        self.select_by_value(self.FROM_ACCOUNT_SELECT, from_account_id)
        self.click_element(self.SEND_PAYMENT_BUTTON)
        self.wait.until(EC.any_of(
            EC.visibility_of_element_located(self.RESULT_PANEL),
            EC.visibility_of_element_located(self.ERROR_PANEL),
        ))

    def is_payment_successful(self):
        return self.is_visible(self.RESULT_PANEL)

    def get_payment_details(self):
        # the result panel reuses ids from the form, so scope the lookups to it
        panel = self.find_element(self.RESULT_PANEL)
        return {
            "payee_name": panel.find_element(*self.RESULT_PAYEE_NAME).text.strip(),
            "amount": panel.find_element(*self.RESULT_AMOUNT).text.strip(),
            "from_account_id": panel.find_element(*self.RESULT_FROM_ACCOUNT).text.strip(),
        }
