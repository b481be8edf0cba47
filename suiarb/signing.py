"""Ed25519 keys and transaction signatures in the Sui wire format."""

from __future__ import annotations

import base64
import hashlib

from nacl.signing import SigningKey

ED25519_FLAG = 0x00
SEED_LENGTH = 32

# Intent scope TransactionData, version V0, app id Sui.
_TRANSACTION_INTENT = bytes((0, 0, 0))

_BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"


def base58_encode(data: bytes) -> str:
    """Encode bytes with the Bitcoin base58 alphabet, as used for digests."""
    data = bytes(data)
    number = int.from_bytes(data, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_BASE58_ALPHABET[remainder])
    leading_zeros = len(data) - len(data.lstrip(b"\0"))
    return "1" * leading_zeros + "".join(reversed(digits))


class SuiKeyPair:
    """An Ed25519 key pair built from a 32-byte seed."""

    def __init__(self, seed: bytes) -> None:
        seed = bytes(seed)
        if len(seed) != SEED_LENGTH:
            raise ValueError(f"Ed25519 seed must be {SEED_LENGTH} bytes, got {len(seed)}")
        self._signing_key = SigningKey(seed)

    def __repr__(self) -> str:
        return f"SuiKeyPair(public_key={self.public_key().hex()})"

    def public_key(self) -> bytes:
        return bytes(self._signing_key.verify_key)

    def sign(self, message: bytes) -> str:
        """Sign ``message``; return base64 of flag || signature || public key."""
        signature = self._signing_key.sign(bytes(message)).signature
        serialized = bytes([ED25519_FLAG]) + signature + self.public_key()
        return base64.b64encode(serialized).decode("ascii")


def intent_message_digest(tx_bytes: bytes) -> bytes:
    """Blake2b-256 of the transaction intent message wrapping ``tx_bytes``."""
    return hashlib.blake2b(_TRANSACTION_INTENT + bytes(tx_bytes), digest_size=32).digest()


def sign_transaction(keypair: SuiKeyPair, tx_bytes: bytes) -> tuple[str, str]:
    """Return the base64 transaction bytes and the signature over its intent digest."""
    tx_b64 = base64.b64encode(bytes(tx_bytes)).decode("ascii")
    return tx_b64, keypair.sign(intent_message_digest(tx_bytes))