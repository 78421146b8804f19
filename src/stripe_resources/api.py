"""
Public, high-level helpers for building an API client.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import Client
from .core.config import ClientConfig, ClientParameters, load_client_config

__all__ = ["create_client"]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    secret_key: Optional[str] = None,
    api_base: Optional[str] = None,
    stripe_account: Optional[str] = None,
    api_version: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> Client:
    """
    Construct a :class:`Client`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            secret_key,
            api_base,
            stripe_account,
            api_version,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            secret_key=secret_key,
            api_base=api_base,
            stripe_account=stripe_account,
            api_version=api_version,
            timeout_seconds=timeout_seconds,
        )
    return Client(cfg, session=session)
