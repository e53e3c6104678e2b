"""Copy a browser-established session into an HTTP probe.

A WebDriver cookie jar and a ``requests`` session never share state on their
own. Bridging is an explicit, one-way copy: read the session cookie from the
browser, format it as a ``Cookie`` header value, hand it to the probe.
"""
import logging

from parabank.errors import SessionError
from parabank.http_probe import SESSION_COOKIE, ParaBankProbe

logger = logging.getLogger(__name__)


def session_cookie_from_driver(driver, cookie_name: str = SESSION_COOKIE) -> str:
    """Return ``name=value`` for the browser's session cookie."""
    cookie = driver.get_cookie(cookie_name)
    if not cookie or not cookie.get("value"):
        raise SessionError(f"Browser has no {cookie_name} cookie; is the user logged in?")
    return f"{cookie_name}={cookie['value']}"


def bridge_session(driver, probe: ParaBankProbe, cookie_name: str = SESSION_COOKIE) -> str:
    """Inject the browser's current session into ``probe`` and return the cookie string.

    The probe must belong to the same test case as the driver; sharing one
    probe between tests would mix identities.
    """
    cookie = session_cookie_from_driver(driver, cookie_name)
    probe.set_session_id(cookie)
    logger.info("Bridged browser %s into HTTP probe", cookie_name)
    return cookie
