"""TLS settings for connections to Fabric-X services."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger("fxconfig.client")


@dataclass
class TLSConfig:
    """TLS settings of a service endpoint."""

    enabled: bool = False
    server_name_override: str = ""
    root_cert_paths: list[str] = field(default_factory=list)
    client_key_path: str = ""
    client_cert_path: str = ""


@dataclass
class SecureOptions:
    """Loaded TLS material ready for opening a connection."""

    use_tls: bool = False
    server_name_override: str = ""
    server_root_cas: list[bytes] = field(default_factory=list)
    require_client_cert: bool = False
    key: bytes = b""
    certificate: bytes = b""


def load_file(path: str) -> bytes:
    """Read a file, naming it in the error if it cannot be read."""
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except OSError as exc:
        if exc.errno is not None:
            raise OSError(
                exc.errno, f"failed opening file {path}: {exc.strerror}", path
            ) from exc
        raise OSError(f"failed opening file {path}: {exc}") from exc


def create_secure_options(tls: TLSConfig | None) -> SecureOptions:
    """Build secure options from TLS settings, loading certificates and keys."""
    options = SecureOptions()
    if tls is None or not tls.enabled:
        return options

    options.use_tls = True
    options.server_name_override = tls.server_name_override
    options.server_root_cas = [load_file(path) for path in tls.root_cert_paths]

    if not tls.client_key_path or not tls.client_cert_path:
        if tls.client_key_path or tls.client_cert_path:
            logger.warning(
                "mTLS disabled: both clientKey and clientCert must be set; "
                "ignoring partial mTLS configuration"
            )
        return options

    key = load_file(tls.client_key_path)
    certificate = load_file(tls.client_cert_path)
    options.require_client_cert = True
    options.key = key
    options.certificate = certificate
    return options