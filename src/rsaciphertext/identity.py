"""State identity derivation for persisted ciphertext.

The identity is only a lookup key for the host's state store. SHA-1 is good enough to keep keys apart and is not
relied upon for anything security related; do not reuse it for such purposes.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import hashlib


def state_id(ciphertext_b64: str) -> str:
    """Derives the state identity of a base64 ciphertext.

    Args:
        ciphertext_b64: The base64 encoded ciphertext. Surrounding whitespace is ignored.

    Returns:
        Lowercase hex digest, or an empty string for empty input.
    """
    if ciphertext_b64 == "":
        return ""
    return hashlib.sha1(ciphertext_b64.strip().encode("utf-8")).hexdigest()
