"""Exceptions raised by rsaciphertext.

All errors share the `CiphertextError` base, but also subclass the builtin that describes them best, so callers
that only care about `ValueError` or `RuntimeError` can keep catching those.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class CiphertextError(Exception):
    """Base class of every rsaciphertext error."""


class InvalidPublicKey(CiphertextError, ValueError):
    """The supplied public key could not be used."""


class NoPEMBlock(InvalidPublicKey):
    """No PEM-encoded block was found in the key text."""


class MalformedKey(InvalidPublicKey):
    """The PEM block does not hold a well-formed public key structure."""


class WrongKeyType(InvalidPublicKey):
    """The public key is well-formed, but not an RSA key."""


class InvalidPaddingOrHash(CiphertextError, ValueError):
    """Padding mode or hash algorithm outside the supported set."""


class PlaintextTooLarge(CiphertextError, ValueError):
    """The plaintext does not fit the key and padding scheme.

    Attributes:
        length: Length of the rejected plaintext in bytes.
        maximum: Largest plaintext in bytes the key and padding can carry.
    """

    def __init__(self, length: int, maximum: int) -> None:
        self.length = length
        self.maximum = max(maximum, 0)
        super().__init__(f"Plaintext of {length} bytes exceeds the maximum of {self.maximum} bytes for this key and "
                         "padding")


class EncryptionFailure(CiphertextError, RuntimeError):
    """The encryption primitive failed for a reason other than the inputs."""


class InvalidConfig(CiphertextError, ValueError):
    """Resource configuration with missing, unknown or mistyped attributes."""
