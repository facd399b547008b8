"""
Farm Market Event Store — Hash-Chain Codes
============================================
Codes for hash-chain integrity violations.
"""


class HashRejectionCode:
    HASH_CHAIN_BROKEN = "HASH_CHAIN_BROKEN"
    HASH_COMPUTATION_MISMATCH = "HASH_COMPUTATION_MISMATCH"
    SEQUENCE_GAP = "SEQUENCE_GAP"
