"""HTTP client settings shared by Prometheus and Alertmanager configs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from promsynth.core.projection import Projectable
from promsynth.core.secret import Secret


@dataclass
class BasicAuth(Projectable):
    """HTTP basic authentication."""

    username: str = ""
    password: Optional[Secret] = None
    password_file: str = ""


@dataclass
class Authorization(Projectable):
    """Authorization header credentials, ``Bearer`` unless ``type`` says otherwise."""

    type: str = ""
    credentials: Optional[Secret] = None
    credentials_file: str = ""


@dataclass
class TLSConfig(Projectable):
    ca_file: str = ""
    cert_file: str = ""
    key_file: str = ""
    server_name: str = ""
    insecure_skip_verify: Optional[bool] = None
    min_version: str = ""


@dataclass
class HTTPConfig(Projectable):
    """Client settings used by Alertmanager notifiers (``http_config``)."""

    basic_auth: Optional[BasicAuth] = None
    authorization: Optional[Authorization] = None
    bearer_token: Optional[Secret] = None
    bearer_token_file: str = ""
    tls_config: Optional[TLSConfig] = None
    proxy_url: str = ""
    follow_redirects: Optional[bool] = None
    enable_http2: Optional[bool] = None
