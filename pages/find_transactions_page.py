'''
Created on 14-Nov-2024

@author: bibin
'''
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from .base_page import BasePage

class FindTransactionsPage(BasePage):
    PAGE_PATH = "findtrans.htm"
    ACCOUNT_SELECT = (By.ID, "accountId")
    TRANSACTION_ID_FIELD = (By.ID, "transactionId")
    FROM_DATE_FIELD = (By.ID, "fromDate")
    TO_DATE_FIELD = (By.ID, "toDate")
    AMOUNT_FIELD = (By.ID, "amount")
    FIND_BY_ID_BUTTON = (By.ID, "findById")
    FIND_BY_DATE_RANGE_BUTTON = (By.ID, "findByDateRange")
    FIND_BY_AMOUNT_BUTTON = (By.ID, "findByAmount")
    RESULT_CONTAINER = (By.ID, "resultContainer")
    TRANSACTION_ROWS = (By.CSS_SELECTOR, "#transactionTable tbody tr")
    ERROR_PANEL = (By.ID, "errorContainer")

    def select_account(self, account_id):
        self.select_by_value(self.ACCOUNT_SELECT, account_id)

    def _search(self, account_id, field, value, button):
        self._submit(account_id, {field: value}, button)

    def _submit(self, account_id, values, button):
        self.select_account(account_id)
        for field, value in values.items():
            self.input_text(field, str(value))
        self.click_element(button)
        self.wait.until(EC.any_of(
            EC.visibility_of_element_located(self.RESULT_CONTAINER),
            EC.visibility_of_element_located(self.ERROR_PANEL),
        ))

    def search_by_amount(self, account_id, amount):
        self._search(account_id, self.AMOUNT_FIELD, amount, self.FIND_BY_AMOUNT_BUTTON)

    def search_by_id(self, account_id, transaction_id):
        self._search(account_id, self.TRANSACTION_ID_FIELD, transaction_id, self.FIND_BY_ID_BUTTON)

    def search_by_date_range(self, account_id, from_date, to_date):
        """Dates in MM-DD-YYYY, both ends inclusive."""
        self._submit(
            account_id,
            {self.FROM_DATE_FIELD: from_date, self.TO_DATE_FIELD: to_date},
            self.FIND_BY_DATE_RANGE_BUTTON,
        )

    def get_transactions(self):
        transactions = []
        for row in self.find_elements(self.TRANSACTION_ROWS):
            cells = row.find_elements(By.TAG_NAME, "td")
            if len(cells) < 3:
                continue
            debit = cells[2].text.strip()
            credit = cells[3].text.strip() if len(cells) > 3 else ""
            transactions.append({
                "date": cells[0].text.strip(),
                "description": cells[1].text.strip(),
                "debit": debit,
                "credit": credit,
            })
        return transactions
