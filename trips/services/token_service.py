"""
Share-link tokens.

The raw token goes to the person creating the link exactly once; Firestore
only ever sees its SHA-256 hash.
"""

import hashlib
import hmac
import secrets
from typing import NamedTuple

TOKEN_BYTES = 32  # 256 bits -> 64 hex characters


class TokenPair(NamedTuple):
    raw_token: str
    hashed_token: str


class TokenService:
    """Generates, hashes and verifies opaque share-link tokens."""

    def generate_token(self) -> TokenPair:
        """Create a new random token and the hash to store for it.

        Returns:
            TokenPair(raw_token, hashed_token), both 64 lowercase hex characters.
        """
        raw_token = secrets.token_hex(TOKEN_BYTES)
        return TokenPair(raw_token=raw_token, hashed_token=self.hash_token(raw_token))

    def hash_token(self, raw_token: str) -> str:
        # surrogatepass: lone surrogates (valid in JSON) hash instead of raising
        return hashlib.sha256(raw_token.encode('utf-8', 'surrogatepass')).hexdigest()

    def verify_token(self, raw_token: str, stored_hash: str) -> bool:
        """Check a presented token against a stored hash in constant time.

        Args:
            raw_token: The token taken from the share URL.
            stored_hash: The tokenHash field of the share-link record.

        Returns:
            True only if the hashes match. Malformed or mismatched-length
            input returns False rather than raising.
        """
        if not isinstance(raw_token, str) or not isinstance(stored_hash, str):
            return False
        computed = self.hash_token(raw_token).encode('utf-8')
        return hmac.compare_digest(computed, stored_hash.lower().encode('utf-8', 'surrogatepass'))


# Default instance
token_service = TokenService()
