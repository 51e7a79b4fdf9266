"""Public key validation: PEM text in, RSA public key out.

Accepts X.509 SubjectPublicKeyInfo blocks (`-----BEGIN PUBLIC KEY-----`), as well as bare PKCS1 RSAPublicKey blocks
(`-----BEGIN RSA PUBLIC KEY-----`). Everything else is rejected before any encryption is attempted.

Typical usage example:

    key = validate(pem_text)
    key.bsize
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.native import encoder as localize
from pyasn1_modules import rfc5280
from pyasn1_modules import rfc8017

from rsaciphertext import pem
from rsaciphertext.errors import MalformedKey
from rsaciphertext.errors import NoPEMBlock
from rsaciphertext.errors import WrongKeyType
from rsaciphertext.logger import logger
from rsaciphertext.rsa import RSAPubKey

PKCS1_LABEL = "RSA PUBLIC KEY"
DER_NULL = b"\x05\x00"

KNOWN_ALGORITHMS = {
    "1.2.840.10040.4.1": "DSA",
    "1.2.840.10045.2.1": "EC",
    "1.2.840.113549.1.1.10": "RSASSA-PSS",
    "1.3.101.110": "X25519",
    "1.3.101.111": "X448",
    "1.3.101.112": "Ed25519",
    "1.3.101.113": "Ed448",
}


def validate(pem_text: str) -> RSAPubKey:
    """Parses PEM text and checks that it holds an RSA public key.

    Only the first PEM block is looked at.

    Args:
        pem_text: Text containing the PEM-encoded public key.

    Returns:
        The RSA public key.

    Raises:
        NoPEMBlock: If the text holds no PEM block.
        MalformedKey: If the block is not a well-formed public key.
        WrongKeyType: If the public key is not an RSA key.
    """
    block = pem.decode_pem(pem_text)
    if block is None:
        raise NoPEMBlock("The public key must be in PEM format. No PEM-encoded blocks were found.")
    if block.label == PKCS1_LABEL:
        key = parse_pkcs1(block.payload)
    else:
        key = parse_spki(block.payload)
    logger.debug("Validated %d-bit RSA public key from %r block", key.mod.bit_length(), block.label)
    return key


def parse_spki(payload: bytes) -> RSAPubKey:
    """Decodes a DER SubjectPublicKeyInfo holding an RSA key.

    Raises:
        MalformedKey: If the structure cannot be decoded or the RSA algorithm parameters are not NULL.
        WrongKeyType: If the key algorithm is not rsaEncryption.
    """
    spki = _decode(payload, rfc5280.SubjectPublicKeyInfo(), "SubjectPublicKeyInfo")
    algorithm = spki["algorithm"]["algorithm"]
    if algorithm != rfc8017.rsaEncryption:
        name = KNOWN_ALGORITHMS.get(str(algorithm), f"unknown algorithm {algorithm}")
        raise WrongKeyType(f"The public key must be in PEM format and be an RSA public key, got {name}.")
    params = spki["algorithm"]["parameters"]
    if not params.isValue or params.asOctets() != DER_NULL:
        raise MalformedKey("The public key must be in PEM format. Error: RSA key missing NULL parameters.")
    try:
        keybytes = spki["subjectPublicKey"].asOctets()
    except (error.PyAsn1Error, ValueError) as err:
        raise MalformedKey(f"The public key must be in PEM format. Error: unreadable key bits: {err}") from err
    return parse_pkcs1(keybytes)


def parse_pkcs1(payload: bytes) -> RSAPubKey:
    """Decodes a DER PKCS1 RSAPublicKey.

    Raises:
        MalformedKey: If the structure cannot be decoded or holds unusable numbers.
    """
    keydata = _decode(payload, rfc8017.RSAPublicKey(), "RSAPublicKey")
    pykeyd = localize.encode(keydata)
    mod, expo = pykeyd["modulus"], pykeyd["publicExponent"]
    if mod <= 0:
        raise MalformedKey("The public key must be in PEM format. Error: RSA modulus is not a positive number.")
    if expo < 2:
        raise MalformedKey("The public key must be in PEM format. Error: RSA public exponent is too small.")
    return RSAPubKey(mod, expo)


def _decode(payload: bytes, spec, what: str):
    try:
        decoded, rest = decoder.decode(payload, asn1Spec=spec)
    except error.PyAsn1Error as err:
        raise MalformedKey(f"The public key must be in PEM format. Error: not a valid {what}: {err}") from err
    if rest:
        raise MalformedKey(f"The public key must be in PEM format. Error: trailing data after {what}.")
    return decoded
