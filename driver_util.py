import chromedriver_autoinstaller
from selenium import webdriver

from parabank.config import settings


def get_driver(headless=None):
    """Installs the appropriate chromedriver and returns an initialized WebDriver instance.

    Performance logging is switched on so NetworkInterceptor can read DevTools
    network events; browser logging feeds the console excerpt attached on failure.
    """
    chromedriver_autoinstaller.install()  # Automatically installs chromedriver if not present
    if headless is None:
        headless = settings.headless
    options = webdriver.ChromeOptions()
    if headless:
        options.add_argument("--headless=new")
    options.add_argument("--window-size=1920,1080")
    options.add_argument("--no-sandbox")
    options.add_argument("--disable-dev-shm-usage")
    options.set_capability("goog:loggingPrefs", {"performance": "ALL", "browser": "ALL"})
    driver = webdriver.Chrome(options=options)
    driver.set_page_load_timeout(settings.timeout)
    return driver
