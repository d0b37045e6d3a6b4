"""Enumerations for the asset tracker."""

from enum import StrEnum


class TransactionType(StrEnum):
    PURCHASE = "PURCHASE"
    SALE = "SALE"
