"""Well-known addresses and sizes."""

SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"

PUBKEY_LENGTH = 32
