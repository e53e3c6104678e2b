'''
Created on 14-Nov-2024

@author: bibin
'''
from selenium.webdriver.common.by import By
from .base_page import BasePage

class AccountsOverviewPage(BasePage):
    PAGE_PATH = "overview.htm"
    ACCOUNTS_TABLE = (By.ID, "accountTable")
    ACCOUNT_LINKS = (By.CSS_SELECTOR, "#accountTable tbody tr td:first-child a")
    ACCOUNT_ROWS = (By.XPATH, "//table[@id='accountTable']/tbody/tr[td/a]")
    TOTAL_BALANCE = (By.XPATH, "//table[@id='accountTable']/tbody/tr[last()]/td[2]/b")
    WELCOME_MESSAGE = (By.CSS_SELECTOR, "#leftPanel p.smallText")

    def wait_for_accounts(self):
        # rows are rendered by Angular once the accounts XHR completes
        self.wait.until(lambda _: len(self.find_elements(self.ACCOUNT_LINKS)) > 0)

    def get_account_ids(self):
        self.wait_for_accounts()
        return [link.text.strip() for link in self.find_elements(self.ACCOUNT_LINKS)]

    def get_accounts_info(self):
        self.wait_for_accounts()
        accounts = []
        for row in self.find_elements(self.ACCOUNT_ROWS):
            cells = row.find_elements(By.TAG_NAME, "td")
            accounts.append({
                "id": cells[0].text.strip(),
                "balance": cells[1].text.strip(),
                "available_amount": cells[2].text.strip(),
            })
        return accounts

    def get_account_balance(self, account_id):
        for account in self.get_accounts_info():
            if account["id"] == str(account_id):
                return account["balance"]
        return None

    def get_total_balance(self):
        self.wait_for_accounts()
        return self.get_text(self.TOTAL_BALANCE)

    def get_welcome_message(self):
        return self.get_text(self.WELCOME_MESSAGE)

    def is_accounts_table_displayed(self):
        return self.is_visible(self.ACCOUNTS_TABLE)
