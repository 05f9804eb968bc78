"""Monetary domain package.

This package contains the `Money` value object, the currency and unit descriptors,
the immutable `CurrencyRegistry` with predefined currencies, and the conversion errors.
"""
