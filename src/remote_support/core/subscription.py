"""Aeon Remote Support subscription (valet) notification."""

import httpx

from remote_support.utils.output import info, warn


def subscribe(url: str, ip: str, password: str, client: httpx.Client | None = None) -> bool:
    """Report the VPN IP and access password to the subscription service.

    Best effort: failures are printed as warnings and never raised.

    Returns:
        True if the service accepted the subscription.
    """
    info("Subscribing...")
    data = {"ip": ip, "password": password}
    try:
        if client is None:
            resp = httpx.post(url, data=data, timeout=None)
        else:
            resp = client.post(url, data=data)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        warn(f"Valet subscription error: {e}")
        return False

    if not resp.is_success:
        warn(f"Valet subscription failed: {resp.status_code}")
        return False
    return True
