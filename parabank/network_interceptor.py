"""Watch the browser's network traffic for one specific response.

Chrome is started with ``goog:loggingPrefs`` performance logging (see
``driver_util.get_driver``), so every DevTools ``Network.*`` event is buffered
by chromedriver until read. A :class:`ResponseWaiter` drains that buffer when
it is created, which is what "arming" means here: any matching response that
arrives afterwards stays in the buffer until :meth:`ResponseWaiter.wait`
picks it up. Arm first, then trigger the navigation or click.

Usage::

    waiter = NetworkInterceptor(driver).expect_response(CUSTOMER_ACCOUNTS_URL)
    LoginPage(driver).login(username, password)
    account = extract_identity(waiter.wait())
"""
import base64
import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Pattern, Set, Union

from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.support.ui import WebDriverWait

from parabank.config import settings
from parabank.errors import InterceptTimeoutError, SchemaViolationError
from parabank.models import Account, decode_accounts

logger = logging.getLogger(__name__)

# services_proxy/bank/customers/12212/accounts, not .../accounts/13344/transactions
CUSTOMER_ACCOUNTS_URL = re.compile(r"/customers/\d+/accounts(?:\?|$)")

UrlPredicate = Callable[[str], bool]


@dataclass(frozen=True)
class InterceptedResponse:
    url: str
    status: int
    body: str

    def json(self) -> Any:
        try:
            return json.loads(self.body)
        except ValueError as e:
            raise SchemaViolationError(f"Response from {self.url} is not JSON: {self.body[:200]!r}") from e


def url_matches(pattern: Union[str, Pattern[str]]) -> UrlPredicate:
    """Predicate that searches the response URL with ``pattern``."""
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    return lambda url: regex.search(url) is not None


def extract_identity(response: InterceptedResponse) -> Account:
    """First account of a ``/customers/{id}/accounts`` body, carrying ``id`` and ``customerId``."""
    accounts = decode_accounts(response.json())
    if not accounts:
        raise SchemaViolationError(f"Response from {response.url} lists no accounts")
    return accounts[0]


class ResponseWaiter:
    """One-shot listener for the first response whose URL satisfies a predicate."""

    def __init__(self, driver, predicate: UrlPredicate, description: str,
                 timeout: float, poll_frequency: float):
        self._driver = driver
        self._predicate = predicate
        self.description = description
        self.timeout = timeout
        self.poll_frequency = poll_frequency
        self._pending: Dict[str, Dict[str, Any]] = {}
        self._finished: Set[str] = set()
        self._result: Optional[InterceptedResponse] = None
        # events logged before arming belong to earlier actions
        driver.get_log("performance")

    def _events(self, driver):
        for entry in driver.get_log("performance"):
            try:
                yield json.loads(entry["message"])["message"]
            except (KeyError, TypeError, ValueError):
                logger.debug("Skipping unreadable performance log entry: %r", entry)

    def _poll(self, driver) -> Optional[InterceptedResponse]:
        for event in self._events(driver):
            method = event.get("method")
            params = event.get("params", {})
            request_id = params.get("requestId")
            if method == "Network.responseReceived":
                response = params.get("response", {})
                if self._predicate(response.get("url", "")):
                    logger.debug("Matched %s (%s)", response.get("url"), self.description)
                    self._pending[request_id] = response
            elif method == "Network.loadingFinished" and request_id in self._pending:
                self._finished.add(request_id)
            elif method == "Network.loadingFailed":
                self._pending.pop(request_id, None)

        for request_id in list(self._finished):
            try:
                body = driver.execute_cdp_cmd("Network.getResponseBody", {"requestId": request_id})
            except WebDriverException as e:
                logger.debug("Body for %s not available yet: %s", request_id, e.msg)
                continue
            text = body.get("body", "")
            if body.get("base64Encoded"):
                text = base64.b64decode(text).decode("utf-8")
            response = self._pending[request_id]
            return InterceptedResponse(url=response.get("url", ""), status=int(response.get("status", 0)), body=text)
        return None

    def wait(self) -> InterceptedResponse:
        """Block until the matching response has been fully received."""
        if self._result is None:
            try:
                self._result = WebDriverWait(
                    self._driver, self.timeout, poll_frequency=self.poll_frequency
                ).until(self._poll)
            except TimeoutException as e:
                raise InterceptTimeoutError(self.description, self.timeout) from e
            logger.info("Intercepted %s %s", self._result.status, self._result.url)
        return self._result


class NetworkInterceptor:
    """Factory for response waiters bound to one WebDriver."""

    def __init__(self, driver, timeout: Optional[float] = None, poll_frequency: float = 0.25):
        self.driver = driver
        self.timeout = timeout if timeout is not None else settings.intercept_timeout
        self.poll_frequency = poll_frequency

    def expect_response(self, match: Union[str, Pattern[str], UrlPredicate],
                        timeout: Optional[float] = None) -> ResponseWaiter:
        """Arm a waiter. Call this *before* the action that causes the response."""
        if callable(match):
            predicate, description = match, getattr(match, "__name__", "predicate")
        else:
            predicate = url_matches(match)
            description = match if isinstance(match, str) else match.pattern
        return ResponseWaiter(
            self.driver,
            predicate,
            description,
            timeout if timeout is not None else self.timeout,
            self.poll_frequency,
        )
