import base64
import json
import unittest

from selenium.common.exceptions import WebDriverException

from parabank.errors import InterceptTimeoutError, SchemaViolationError
from parabank.network_interceptor import (
    CUSTOMER_ACCOUNTS_URL,
    InterceptedResponse,
    NetworkInterceptor,
    extract_identity,
    url_matches,
)

ACCOUNTS_URL = "https://bank.test/parabank/services_proxy/bank/customers/12212/accounts"
ACCOUNTS_BODY = json.dumps([
    {"id": 13344, "customerId": 12212, "type": "CHECKING", "balance": 515.5},
    {"id": 13455, "customerId": 12212, "type": "SAVINGS", "balance": 100.0},
])


def response_received(request_id, url, status=200):
    return {
        "method": "Network.responseReceived",
        "params": {"requestId": request_id, "response": {"url": url, "status": status}},
    }


def loading_finished(request_id):
    return {"method": "Network.loadingFinished", "params": {"requestId": request_id}}


def loading_failed(request_id):
    return {"method": "Network.loadingFailed", "params": {"requestId": request_id}}


class FakeDriver:
    """Stands in for a Chrome WebDriver with performance logging enabled."""

    def __init__(self):
        self.batches = []
        self.bodies = {}
        self.body_failures = 0
        self.cdp_calls = []

    def queue(self, *events):
        self.batches.append([
            {"level": "INFO", "timestamp": 0, "message": json.dumps({"message": e, "webview": "page-1"})}
            for e in events
        ])

    def get_log(self, log_type):
        assert log_type == "performance"
        return self.batches.pop(0) if self.batches else []

    def execute_cdp_cmd(self, cmd, params):
        self.cdp_calls.append((cmd, params))
        if self.body_failures:
            self.body_failures -= 1
            raise WebDriverException("No resource with given identifier found")
        return self.bodies[params["requestId"]]


class NetworkInterceptorTest(unittest.TestCase):
    def setUp(self):
        self.driver = FakeDriver()
        self.interceptor = NetworkInterceptor(self.driver, timeout=0.5, poll_frequency=0.01)

    def test_matching_response_after_arming_is_returned(self):
        self.driver.queue()  # drained when the waiter is armed
        waiter = self.interceptor.expect_response(CUSTOMER_ACCOUNTS_URL)
        self.driver.queue(
            response_received("1", "https://bank.test/parabank/overview.htm"),
            response_received("2", ACCOUNTS_URL),
            loading_finished("1"),
            loading_finished("2"),
        )
        self.driver.bodies["2"] = {"body": ACCOUNTS_BODY, "base64Encoded": False}

        response = waiter.wait()

        self.assertEqual(ACCOUNTS_URL, response.url)
        self.assertEqual(200, response.status)
        self.assertEqual([("Network.getResponseBody", {"requestId": "2"})], self.driver.cdp_calls)
        account = extract_identity(response)
        self.assertEqual(13344, account.id)
        self.assertEqual(12212, account.customer_id)

    def test_response_logged_before_arming_is_not_matched(self):
        self.driver.queue(response_received("1", ACCOUNTS_URL), loading_finished("1"))
        self.driver.bodies["1"] = {"body": ACCOUNTS_BODY}

        waiter = self.interceptor.expect_response(CUSTOMER_ACCOUNTS_URL)

        with self.assertRaises(InterceptTimeoutError) as ctx:
            waiter.wait()
        self.assertIsInstance(ctx.exception, TimeoutError)
        self.assertEqual([], self.driver.cdp_calls)

    def test_body_is_read_only_after_loading_finished(self):
        waiter = self.interceptor.expect_response(CUSTOMER_ACCOUNTS_URL)
        self.driver.queue(response_received("7", ACCOUNTS_URL))
        self.driver.queue()
        self.driver.queue(loading_finished("7"))
        self.driver.bodies["7"] = {"body": ACCOUNTS_BODY}

        response = waiter.wait()

        self.assertEqual(1, len(self.driver.cdp_calls))
        self.assertEqual(ACCOUNTS_BODY, response.body)

    def test_body_fetch_is_retried_until_available(self):
        waiter = self.interceptor.expect_response(CUSTOMER_ACCOUNTS_URL)
        self.driver.queue(response_received("3", ACCOUNTS_URL), loading_finished("3"))
        self.driver.bodies["3"] = {"body": ACCOUNTS_BODY}
        self.driver.body_failures = 2

        response = waiter.wait()

        self.assertEqual(3, len(self.driver.cdp_calls))
        self.assertEqual(ACCOUNTS_BODY, response.body)

    def test_base64_body_is_decoded(self):
        waiter = self.interceptor.expect_response(CUSTOMER_ACCOUNTS_URL)
        self.driver.queue(response_received("4", ACCOUNTS_URL), loading_finished("4"))
        self.driver.bodies["4"] = {"body": base64.b64encode(ACCOUNTS_BODY.encode()).decode(), "base64Encoded": True}

        self.assertEqual(ACCOUNTS_BODY, waiter.wait().body)

    def test_failed_load_is_dropped_and_times_out(self):
        waiter = self.interceptor.expect_response(CUSTOMER_ACCOUNTS_URL)
        self.driver.queue(response_received("5", ACCOUNTS_URL), loading_failed("5"), loading_finished("5"))

        with self.assertRaises(InterceptTimeoutError):
            waiter.wait()

    def test_wait_returns_the_same_response_twice(self):
        waiter = self.interceptor.expect_response(CUSTOMER_ACCOUNTS_URL)
        self.driver.queue(response_received("6", ACCOUNTS_URL), loading_finished("6"))
        self.driver.bodies["6"] = {"body": ACCOUNTS_BODY}

        self.assertIs(waiter.wait(), waiter.wait())

    def test_callable_predicate(self):
        waiter = self.interceptor.expect_response(lambda url: url.endswith("/overview.htm"))
        self.driver.queue(
            response_received("8", ACCOUNTS_URL),
            response_received("9", "https://bank.test/parabank/overview.htm"),
            loading_finished("8"),
            loading_finished("9"),
        )
        self.driver.bodies["9"] = {"body": "<html></html>"}

        self.assertTrue(waiter.wait().url.endswith("/overview.htm"))

    def test_unreadable_log_entries_are_skipped(self):
        waiter = self.interceptor.expect_response(CUSTOMER_ACCOUNTS_URL)
        self.driver.batches.append([{"level": "INFO", "message": "not json"}])
        self.driver.queue(response_received("10", ACCOUNTS_URL), loading_finished("10"))
        self.driver.bodies["10"] = {"body": ACCOUNTS_BODY}

        self.assertEqual(ACCOUNTS_URL, waiter.wait().url)


class CustomerAccountsUrlTest(unittest.TestCase):
    def test_matches_exact_path_only(self):
        matches = url_matches(CUSTOMER_ACCOUNTS_URL)
        self.assertTrue(matches(ACCOUNTS_URL))
        self.assertTrue(matches(ACCOUNTS_URL + "?_=1729296000"))
        self.assertFalse(matches("https://bank.test/parabank/services_proxy/bank/customers/12212"))
        self.assertFalse(matches("https://bank.test/parabank/services_proxy/bank/customers/12212/accounts/13344"))
        self.assertFalse(matches("https://bank.test/parabank/services_proxy/bank/accounts/13344/transactions"))


class ExtractIdentityTest(unittest.TestCase):
    def response(self, body):
        return InterceptedResponse(url=ACCOUNTS_URL, status=200, body=body)

    def test_empty_account_list(self):
        with self.assertRaises(SchemaViolationError):
            extract_identity(self.response("[]"))

    def test_not_json(self):
        with self.assertRaises(SchemaViolationError):
            extract_identity(self.response("<html>Error</html>"))

    def test_missing_customer_id(self):
        with self.assertRaises(SchemaViolationError):
            extract_identity(self.response('[{"id": 13344, "type": "CHECKING", "balance": 0}]'))


if __name__ == "__main__":
    unittest.main()
