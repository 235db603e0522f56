"""
System Program Events — typed event extraction for Solana blocks.

Decodes System Program instructions found in confirmed blocks into
semantically named events (account creation, transfers, nonce
management, seeded allocations) for downstream indexing. Each block is
processed independently; no state is kept between blocks.
"""

__version__ = "0.1.0"
