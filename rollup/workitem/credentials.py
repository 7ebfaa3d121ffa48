"""Authorization scheme selection for Azure DevOps REST calls."""

import base64

from rollup.logger import get_logger
from rollup.workitem.errors import ConfigurationError
from rollup.workitem.types import (
    PERSONAL_TOKEN_ENV,
    PIPELINE_TOKEN_ENV,
    Credential,
    CredentialSources,
)

log = get_logger("CREDENTIALS")


def basic_auth_header(personal_access_token: str) -> str:
    """Encode a PAT as a Basic auth header value with an empty user name."""
    token = f":{personal_access_token}".encode("utf-8")
    return "Basic " + base64.b64encode(token).decode("ascii")


def resolve_credential(sources: CredentialSources) -> Credential:
    """
    Pick exactly one authorization scheme.

    The pipeline access token wins over a personal access token when
    both are set. Blank values count as absent.

    Args:
        sources: Raw token values

    Returns:
        Credential with a ready-to-use Authorization header value

    Raises:
        ConfigurationError: If neither token is available
    """
    access_token = (sources.access_token or "").strip()
    if access_token:
        credential = Credential(header_value=f"Bearer {access_token}", mode="Bearer")
    else:
        pat = (sources.personal_access_token or "").strip()
        if not pat:
            raise ConfigurationError(
                f"No credential found. Set {PIPELINE_TOKEN_ENV} "
                f"or {PERSONAL_TOKEN_ENV}."
            )
        credential = Credential(header_value=basic_auth_header(pat), mode="PAT")

    log.info(f"Using {credential.mode} authentication", auth_mode=credential.mode)
    return credential
