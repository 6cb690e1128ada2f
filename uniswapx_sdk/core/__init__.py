"""
Core order models, codecs, decay math and signing primitives.

This package is independent of ledger access: everything here is pure
construction, encoding, hashing and resolution of order data.
"""
