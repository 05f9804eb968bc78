"""Fixed-point conversion engine.

Parsing, formatting and unit switching of `Money` amounts against a `CurrencyRegistry`,
plus the exact power-of-ten table they scale with.
"""
