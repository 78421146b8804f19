"""
Configuration objects and helpers for the API client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit

from .environment import build_environment

__all__ = [
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "load_client_config",
]

DEFAULT_API_BASE = "https://api.stripe.com/v1"
DEFAULT_TIMEOUT_SECONDS = 80.0

_PARAMETER_TO_ENV_KEY = {
    "secret_key": "STRIPE_SECRET_KEY",
    "api_base": "STRIPE_API_BASE",
    "stripe_account": "STRIPE_ACCOUNT",
    "api_version": "STRIPE_API_VERSION",
    "timeout_seconds": "STRIPE_TIMEOUT_SECONDS",
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientConfig`.

    Every field left as ``None`` falls back to the environment.
    """

    secret_key: Optional[str] = None
    api_base: Optional[str] = None
    stripe_account: Optional[str] = None
    api_version: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None

    def as_overrides(self) -> Dict[str, str]:
        overrides: Dict[str, str] = {}
        for field_name, env_key in _PARAMETER_TO_ENV_KEY.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            overrides[env_key] = _stringify(value)
        return overrides


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = _stringify(value)
    return overrides


def _normalize_secret_key(raw_key: Optional[str]) -> str:
    if raw_key is None:
        raise ConfigError("STRIPE_SECRET_KEY must be provided")
    key = raw_key.strip()
    if not key:
        raise ConfigError("STRIPE_SECRET_KEY must not be empty")
    if any(ch.isspace() for ch in key):
        raise ConfigError("STRIPE_SECRET_KEY must not contain whitespace")
    return key


def _normalize_api_base(raw_base: str) -> str:
    base = raw_base.strip().rstrip("/")
    parts = urlsplit(base)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"STRIPE_API_BASE is not an absolute http(s) URL: '{raw_base}'")
    if parts.query or parts.fragment:
        raise ConfigError("STRIPE_API_BASE must not carry a query string or fragment")
    return base


def _optional(values: Mapping[str, str], key: str) -> Optional[str]:
    value = values.get(key)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"STRIPE_TIMEOUT_SECONDS must be a number, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("STRIPE_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class ClientConfig:
    secret_key: str
    api_base: str = DEFAULT_API_BASE
    stripe_account: Optional[str] = None
    api_version: Optional[str] = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    def headers(self) -> Dict[str, str]:
        """
        Headers sent with every request made with this configuration.
        """
        headers = {"Authorization": f"Bearer {self.secret_key}"}
        if self.stripe_account is not None:
            headers["Stripe-Account"] = self.stripe_account
        if self.api_version is not None:
            headers["Stripe-Version"] = self.api_version
        return headers

    def url_for(self, path: str) -> str:
        return f"{self.api_base}{path}"

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        secret_key = _normalize_secret_key(values.get("STRIPE_SECRET_KEY"))
        api_base = _normalize_api_base(values.get("STRIPE_API_BASE", DEFAULT_API_BASE))
        timeout_seconds = _parse_timeout(
            values.get("STRIPE_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        )

        return cls(
            secret_key=secret_key,
            api_base=api_base,
            stripe_account=_optional(values, "STRIPE_ACCOUNT"),
            api_version=_optional(values, "STRIPE_API_VERSION"),
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        secret_key: Optional[str] = None,
        api_base: Optional[str] = None,
        stripe_account: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "secret_key": secret_key,
                "api_base": api_base,
                "stripe_account": stripe_account,
                "api_version": api_version,
                "timeout_seconds": timeout_seconds,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    secret_key: Optional[str] = None,
    api_base: Optional[str] = None,
    stripe_account: Optional[str] = None,
    api_version: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    Settings can come from environment variables, a ``.env`` file, direct
    keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
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
