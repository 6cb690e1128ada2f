"""
Test suite for uniswapx-sdk

Contains:
- tests/unit/          : Unit tests for models, codec, math, signing, nonces and validation
"""
