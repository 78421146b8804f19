"""
Three-letter ISO currency codes, lowercase as the API sends them.
"""

from __future__ import annotations

from ..core.enums import ApiEnum

__all__ = ["Currency"]


class Currency(ApiEnum):
    AUD = "aud"
    BRL = "brl"
    CAD = "cad"
    CHF = "chf"
    CNY = "cny"
    DKK = "dkk"
    EUR = "eur"
    GBP = "gbp"
    HKD = "hkd"
    INR = "inr"
    JPY = "jpy"
    MXN = "mxn"
    NOK = "nok"
    NZD = "nzd"
    PLN = "pln"
    SEK = "sek"
    SGD = "sgd"
    USD = "usd"
