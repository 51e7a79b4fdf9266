"""Encrypt-on-create RSA ciphertext.

Encrypts a plaintext once against an RSA public key, using PKCS1 v1.5 or OAEP (SHA-256/SHA-512) padding, and exposes
the base64 ciphertext together with a short state identity. A declarative resource adapter embeds the engine in a
create-only resource lifecycle.

Typical usage example:

    key = validate(pem_text)
    res = encrypt(EncryptionRequest.build("Hi there!", key, "OAEP"))
    sid = state_id(res.encoded)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsaciphertext.errors import CiphertextError
from rsaciphertext.errors import EncryptionFailure
from rsaciphertext.errors import InvalidConfig
from rsaciphertext.errors import InvalidPaddingOrHash
from rsaciphertext.errors import InvalidPublicKey
from rsaciphertext.errors import MalformedKey
from rsaciphertext.errors import NoPEMBlock
from rsaciphertext.errors import PlaintextTooLarge
from rsaciphertext.errors import WrongKeyType
from rsaciphertext.identity import state_id
from rsaciphertext.keys import validate
from rsaciphertext.resource import Action
from rsaciphertext.resource import CiphertextResource
from rsaciphertext.resource import Provider
from rsaciphertext.resource import ResourceState
from rsaciphertext.rsa import encrypt
from rsaciphertext.rsa import EncryptionRequest
from rsaciphertext.rsa import EncryptionResult
from rsaciphertext.rsa import HashName
from rsaciphertext.rsa import Padding
from rsaciphertext.rsa import RSAPubKey

__version__ = "0.1.0"
provider = Provider(__version__)

__all__ = [
    "Action",
    "CiphertextError",
    "CiphertextResource",
    "EncryptionFailure",
    "EncryptionRequest",
    "EncryptionResult",
    "HashName",
    "InvalidConfig",
    "InvalidPaddingOrHash",
    "InvalidPublicKey",
    "MalformedKey",
    "NoPEMBlock",
    "Padding",
    "PlaintextTooLarge",
    "Provider",
    "ResourceState",
    "RSAPubKey",
    "WrongKeyType",
    "encrypt",
    "provider",
    "state_id",
    "validate",
]
