import base64
import logging

import allure
import pytest
from selenium.common.exceptions import WebDriverException

from driver_util import get_driver
from parabank.config import settings
from parabank.flows import register_new_user
from parabank.http_probe import ParaBankProbe
from parabank.setup_flow import ScenarioBuilder

logger = logging.getLogger(__name__)

CONSOLE_LOG_LINES = 50


def pytest_addoption(parser):
    parser.addoption("--e2e", action="store_true", default=False,
                     help="run tests that drive the live ParaBank site")


def pytest_collection_modifyitems(config, items):
    if config.getoption("--e2e"):
        return
    skip_e2e = pytest.mark.skip(reason="needs --e2e (live browser and network)")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def _test_failed(node):
    reports = (getattr(node, "rep_setup", None), getattr(node, "rep_call", None))
    return any(r is not None and r.failed for r in reports)


def _full_page_screenshot(driver):
    try:
        shot = driver.execute_cdp_cmd("Page.captureScreenshot", {"format": "png", "captureBeyondViewport": True})
        return base64.b64decode(shot["data"])
    except WebDriverException:
        return driver.get_screenshot_as_png()


def attach_failure_artifacts(driver, name):
    """Screenshot, HTML and console excerpt, into the Allure report and onto disk."""
    out_dir = settings.artifacts_dir / name
    out_dir.mkdir(parents=True, exist_ok=True)
    try:
        png = _full_page_screenshot(driver)
        allure.attach(png, name="failure-screenshot", attachment_type=allure.attachment_type.PNG)
        (out_dir / "failure-screenshot.png").write_bytes(png)

        html = driver.page_source
        allure.attach(html, name="page-html", attachment_type=allure.attachment_type.HTML)
        (out_dir / "page.html").write_text(html, encoding="utf-8")

        console = "\n".join(f"{e['level']} {e['message']}" for e in driver.get_log("browser")[-CONSOLE_LOG_LINES:])
        allure.attach(console, name="console-log", attachment_type=allure.attachment_type.TEXT)
        (out_dir / "console.log").write_text(console, encoding="utf-8")

        logger.info("Failed at URL: %s (artifacts in %s)", driver.current_url, out_dir)
    except WebDriverException as e:
        logger.error("Could not capture failure artifacts: %s", e)


def _browser(request, label):
    driver = get_driver()
    yield driver
    if _test_failed(request.node):
        attach_failure_artifacts(driver, f"{request.node.name}-{label}")
    driver.quit()


@pytest.fixture
def driver(request):
    yield from _browser(request, "main")


@pytest.fixture
def login_driver(request):
    """A second browser with its own cookie jar, used for the intercepted login."""
    yield from _browser(request, "login")


@pytest.fixture
def probe():
    with ParaBankProbe() as probe:
        yield probe


@pytest.fixture
def registered_user(driver):
    with allure.step("Register a new user"):
        return register_new_user(driver)


@pytest.fixture
def scenario(driver, login_driver, probe):
    with allure.step("Register, log in with interception and bridge the session"):
        scenario = ScenarioBuilder(probe).build(driver, login_driver)
    allure.attach(repr(scenario), name="scenario", attachment_type=allure.attachment_type.TEXT)
    return scenario
