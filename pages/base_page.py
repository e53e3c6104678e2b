'''
Created on 02-Nov-2024

@author: bibin
'''
from selenium.common.exceptions import NoSuchElementException, TimeoutException
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import Select, WebDriverWait

from parabank.config import settings


class BasePage:
    PAGE_PATH = "index.htm"

    def __init__(self, driver, timeout=None):
        self.driver = driver
        self.timeout = timeout if timeout is not None else settings.timeout
        self.wait = WebDriverWait(driver, self.timeout)

    def open(self):
        self.driver.get(settings.url(self.PAGE_PATH))
        return self

    def find_element(self, locator):
        return self.wait.until(EC.presence_of_element_located(locator))

    def find_elements(self, locator):
        return self.driver.find_elements(*locator)

    def wait_for_visible(self, locator, timeout=None):
        return WebDriverWait(self.driver, timeout or self.timeout).until(EC.visibility_of_element_located(locator))

    def input_text(self, locator, text):
        element = self.wait_for_visible(locator)
        element.clear()
        element.send_keys(text)

    def click_element(self, locator):
        self.wait.until(EC.element_to_be_clickable(locator)).click()

    def select_by_value(self, locator, value):
        # account <select>s are filled by an XHR after the page loads
        value = str(value)
        select = Select(self.find_element(locator))
        self.wait.until(lambda _: any(o.get_attribute("value") == value for o in select.options))
        select.select_by_value(value)

    def get_option_values(self, locator):
        return [o.get_attribute("value") for o in Select(self.find_element(locator)).options]

    def get_text(self, locator):
        return self.find_element(locator).text.strip()

    def is_visible(self, locator, timeout=None):
        try:
            self.wait_for_visible(locator, timeout)
            return True
        except TimeoutException:
            return False

    def is_present(self, locator):
        try:
            self.driver.find_element(*locator)
            return True
        except NoSuchElementException:
            return False
