"""Manual entry: builds credentials from user-supplied fields."""

from __future__ import annotations

from typing import Optional, Union

from ..payload import Credential, Security, validate_passphrase, validate_ssid
from .base import Discovery


class ManualSource:
    """Source with no stored networks; credentials come from :meth:`credential`."""

    name = "manual"

    def list_known(self) -> Discovery:
        return Discovery()

    def fetch_secret(self, ssid: str) -> Optional[str]:
        return None

    def credential(
        self,
        ssid: str,
        passphrase: Optional[str] = None,
        security: Union[Security, str, None] = None,
        hidden: bool = False,
    ) -> Credential:
        """Validate the fields and return the credential.

        Without an explicit security type an empty passphrase means an open
        network and anything else WPA/WPA2. Raises ``InvalidInput``.
        """

        if security is None:
            security = Security.WPA_WPA2_PERSONAL if passphrase else Security.OPEN
        elif not isinstance(security, Security):
            security = Security.parse(security)
        return Credential(
            ssid=validate_ssid(ssid),
            passphrase=validate_passphrase(passphrase, security),
            security=security,
            hidden=hidden,
        )
