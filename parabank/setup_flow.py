"""Per-test scenario setup spanning the browser and the HTTP probe.

Sequence, all on the calling thread:

1. register a fresh user in the first browser,
2. arm the network interceptor on a second, independent browser and log in,
3. read ``customerId``/``accountId`` from the intercepted accounts response,
4. copy the browser session cookie into the probe,
5. optionally open a second account through the probe.

Only the login itself is allowed to fail the test. A missed or unreadable interception
falls back to reading the overview page; a failed account opening falls back to
self-transfers. Both degradations are logged and visible on the returned
:class:`~parabank.models.Scenario`.
"""
import logging
from typing import Dict, Optional, Union

from parabank.config import settings
from parabank.errors import IdentitySetupError, InterceptTimeoutError, ParaBankError, SchemaViolationError
from parabank.flows import first_account_id, login_user, register_new_user
from parabank.http_probe import ParaBankProbe
from parabank.models import (
    Account,
    AccountType,
    CreatedAccount,
    FallbackSelfTransfer,
    IdentityRecord,
    Scenario,
    TransferTarget,
)
from parabank.network_interceptor import CUSTOMER_ACCOUNTS_URL, NetworkInterceptor, extract_identity
from parabank.retry import with_retry
from parabank.session_bridge import bridge_session

logger = logging.getLogger(__name__)


class ScenarioBuilder:

    def __init__(self, probe: ParaBankProbe, intercept_timeout: Optional[float] = None,
                 retry_attempts: int = 3, retry_delay: float = 1.0):
        self.probe = probe
        self.intercept_timeout = intercept_timeout if intercept_timeout is not None else settings.intercept_timeout
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay

    def _retry(self, fn, *args, **kwargs):
        return with_retry(fn, *args, attempts=self.retry_attempts, delay=self.retry_delay, **kwargs)

    def build(self, register_driver, login_driver, user: Optional[Dict[str, str]] = None,
              second_account: bool = True,
              account_type: Union[AccountType, str] = AccountType.SAVINGS) -> Scenario:
        user = register_new_user(register_driver, user)

        waiter = NetworkInterceptor(login_driver, timeout=self.intercept_timeout).expect_response(CUSTOMER_ACCOUNTS_URL)
        login_user(login_driver, user["username"], user["password"])

        account: Optional[Account] = None
        intercept_error: Optional[ParaBankError] = None
        try:
            account = extract_identity(waiter.wait())
        except (InterceptTimeoutError, SchemaViolationError) as e:
            logger.warning("Accounts response not intercepted (%s); reading ids from the overview page", e)
            intercept_error = e

        cookie = bridge_session(login_driver, self.probe)

        if intercept_error is not None:
            account = self._identity_from_overview(login_driver, intercept_error)
        else:
            self._retry(self.probe.get_customer_account, account.customer_id, account.id)

        identity = IdentityRecord(
            username=user["username"],
            password=user["password"],
            customer_id=account.customer_id,
            account_id=account.id,
        )
        logger.info("Identity established: customer %s, account %s", identity.customer_id, identity.account_id)

        target = self._open_second_account(identity, account_type) if second_account else None
        return Scenario(
            identity=identity,
            session_cookie=cookie,
            target=target,
            intercepted=intercept_error is None,
        )

    def _identity_from_overview(self, driver, cause: ParaBankError) -> Account:
        account_id = first_account_id(driver)
        if account_id is None:
            raise IdentitySetupError("No account id from interception or the overview page") from cause
        return self._retry(self.probe.get_account, account_id)

    def _open_second_account(self, identity: IdentityRecord,
                             account_type: Union[AccountType, str]) -> TransferTarget:
        try:
            account = self._retry(
                self.probe.create_account, identity.customer_id, identity.account_id, account_type
            )
        except ParaBankError as e:
            logger.warning("Could not open a second account (%s); falling back to self-transfers", e)
            return FallbackSelfTransfer(source_account_id=identity.account_id, reason=str(e))
        if account.id == identity.account_id:
            logger.warning("Bank returned the source account %s as the new one; using self-transfers", account.id)
            return FallbackSelfTransfer(source_account_id=identity.account_id, reason="new account id equals source")
        return CreatedAccount(source_account_id=identity.account_id, account_id=account.id)

