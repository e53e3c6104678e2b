"""
ParaBank HTTP probe
Talks to the bank's REST services directly, without a browser
"""
import logging
import re
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

import requests

from parabank.config import settings
from parabank.errors import (
    ApiResponseError,
    AuthenticationError,
    CorrelationError,
    NetworkError,
    SchemaViolationError,
)
from parabank.models import (
    Account,
    AccountType,
    LoginResult,
    Transaction,
    decode,
    decode_accounts,
    decode_transactions,
)

logger = logging.getLogger(__name__)

SESSION_COOKIE = "JSESSIONID"
SESSION_COOKIE_PATTERN = re.compile(rf"{SESSION_COOKIE}=([^;,\s]+)")
CUSTOMER_ID_PATTERN = re.compile(r"customers/(\d+)")
ACCOUNT_ID_PATTERN = re.compile(r"activity\.htm\?id=(\d+)")
LOGIN_REJECTED_MARKERS = (
    "could not be verified",
    "Please enter a username and password",
)
TRANSFER_SUCCESS_TEXT = "Successfully transferred"

Amount = Union[Decimal, int, float, str]


def format_amount(amount: Amount) -> str:
    """Render an amount the way the bank's path and query parameters expect it."""
    if isinstance(amount, float):
        amount = Decimal(str(amount))
    return str(amount)


class ParaBankProbe:
    """Authenticated client for the ParaBank REST surface.

    One probe holds exactly one identity. The session cookie is either
    captured by :meth:`login` or injected with :meth:`set_session_id`, and is
    sent as an explicit ``Cookie`` header on every call.
    """

    def __init__(self, site_url: Optional[str] = None, rest_url: Optional[str] = None,
                 timeout: Optional[float] = None, transaction_timeout_ms: Optional[int] = None):
        self.site_url = (site_url or settings.site_url).rstrip("/")
        self.rest_url = (rest_url or settings.rest_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout
        self.transaction_timeout_ms = (transaction_timeout_ms if transaction_timeout_ms is not None
                                       else settings.transaction_timeout_ms)
        self.session_id: Optional[str] = None
        self._http = requests.Session()
        self._http.headers.update({"Accept": "application/json"})

    # ------------------------------------------------------------------ session

    def set_session_id(self, session_id: str) -> None:
        """Use an already formatted cookie string (``JSESSIONID=...``) for all later calls.

        The value is trusted as-is; whoever extracted it from the browser is
        responsible for handing over a live session.
        """
        self.session_id = session_id

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ParaBankProbe":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _auth_headers(self) -> Dict[str, str]:
        return {"Cookie": self.session_id} if self.session_id else {}

    # ---------------------------------------------------------------- transport

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        headers = {**self._auth_headers(), **kwargs.pop("headers", {})}
        try:
            return self._http.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise NetworkError(f"{method} {url} failed: {e}") from e

    def _call(self, method: str, path: str, action: str, **kwargs) -> requests.Response:
        response = self._request(method, f"{self.rest_url}{path}", **kwargs)
        if not response.ok:
            raise ApiResponseError(response.status_code, f"Failed to {action}: {response.reason}")
        return response

    @staticmethod
    def _json(response: requests.Response, what: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise SchemaViolationError(f"{what} response is not JSON: {response.text[:200]!r}") from e

    # -------------------------------------------------------------------- login

    def login(self, username: str, password: str) -> LoginResult:
        """Log in with a form post and remember the session cookie.

        Afterwards the overview page is scraped for a customer and an account
        id. That scrape is best-effort: anything not found comes back as
        ``None`` rather than raising.
        """
        response = self._request(
            "POST",
            f"{self.site_url}/login.htm",
            data={"username": username, "password": password},
            headers={"Accept": "text/html"},
            allow_redirects=False,
        )
        if not (response.ok or response.is_redirect):
            raise AuthenticationError(response.status_code)
        if any(marker in response.text for marker in LOGIN_REJECTED_MARKERS):
            raise AuthenticationError(response.status_code, "Credentials rejected")

        match = SESSION_COOKIE_PATTERN.search(response.headers.get("Set-Cookie", ""))
        if not match:
            raise AuthenticationError(response.status_code, "No session cookie in login response")
        self.set_session_id(f"{SESSION_COOKIE}={match.group(1)}")
        # the explicit Cookie header is the only identity this probe carries
        self._http.cookies.clear()
        logger.info("Logged in to ParaBank API as %s", username)

        return self._scrape_overview()

    def _scrape_overview(self) -> LoginResult:
        response = self._request("GET", f"{self.site_url}/overview.htm", headers={"Accept": "text/html"})
        if not response.ok:
            logger.warning("Overview page returned HTTP %s; ids unknown", response.status_code)
            return LoginResult()
        customer = CUSTOMER_ID_PATTERN.search(response.text)
        account = ACCOUNT_ID_PATTERN.search(response.text)
        result = LoginResult(
            customer_id=int(customer.group(1)) if customer else None,
            account_id=int(account.group(1)) if account else None,
        )
        if not result.complete:
            logger.warning("Overview scrape incomplete: %s", result)
        return result

    # ----------------------------------------------------------------- accounts

    def get_account(self, account_id: int) -> Account:
        response = self._call("GET", f"/accounts/{account_id}", "get account details")
        return decode(Account, self._json(response, "account"), "account")

    def get_customer_account(self, customer_id: int, account_id: int) -> Account:
        """Fetch one account and check that it really belongs to ``customer_id``."""
        account = self.get_account(account_id)
        if account.customer_id != customer_id:
            raise CorrelationError(
                f"Account {account_id} belongs to customer {account.customer_id}, not {customer_id}"
            )
        return account

    def get_accounts(self, customer_id: int) -> List[Account]:
        response = self._call("GET", f"/customers/{customer_id}/accounts", "get accounts")
        return decode_accounts(self._json(response, "accounts"))

    def create_account(self, customer_id: int, from_account_id: int,
                       account_type: Union[AccountType, str] = AccountType.SAVINGS) -> Account:
        account_type = AccountType(account_type)
        response = self._call(
            "POST",
            "/createAccount",
            "create account",
            params={
                "customerId": customer_id,
                "newAccountType": account_type.code,
                "fromAccountId": from_account_id,
            },
        )
        account = decode(Account, self._json(response, "createAccount"), "created account")
        logger.info("Opened %s account %s for customer %s", account_type.value, account.id, customer_id)
        return account

    # ------------------------------------------------------------- transactions

    def transfer_funds(self, from_account_id: int, to_account_id: int, amount: Amount) -> str:
        """Move money and return the bank's plain-text confirmation."""
        response = self._call(
            "POST",
            "/transfer",
            "transfer funds",
            params={
                "fromAccountId": from_account_id,
                "toAccountId": to_account_id,
                "amount": format_amount(amount),
            },
        )
        logger.info("Transfer %s -> %s of %s: %s", from_account_id, to_account_id, amount, response.text)
        return response.text

    def find_transactions(self, account_id: int, amount: Amount) -> List[Transaction]:
        """Transactions on ``account_id`` with exactly ``amount``; empty when nothing matches."""
        response = self._call(
            "GET",
            f"/accounts/{account_id}/transactions/amount/{format_amount(amount)}",
            "find transactions",
            params={"timeout": self.transaction_timeout_ms},
        )
        return decode_transactions(self._json(response, "transactions"))

    def get_transactions(self, account_id: int) -> List[Transaction]:
        response = self._call("GET", f"/accounts/{account_id}/transactions", "get transactions")
        return decode_transactions(self._json(response, "transactions"))

    def get_transaction(self, transaction_id: int) -> Transaction:
        response = self._call("GET", f"/transactions/{transaction_id}", "get transaction")
        return decode(Transaction, self._json(response, "transaction"), "transaction")
