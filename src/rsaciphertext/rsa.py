"""Provides the RSA encryption engine: padding selection, the RSAES primitives and the request/result types.

Public keys are plain immutable (modulus, exponent) pairs. Both supported encryption schemes, RSAES-PKCS1-v1_5 and
RSAES-OAEP, embed fresh random bytes drawn from the operating system CSPRNG on every call, so encrypting the same
request twice gives two different ciphertexts that decrypt to the same plaintext.

Typical usage example:

    key = validate(pem_text)
    req = EncryptionRequest.build("Hi there!", key, "OAEP", "SHA512")
    res = encrypt(req)
    print(res.encoded)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import enum
import hashlib
from math import ceil
from secrets import token_bytes
import typing

from rsaciphertext.errors import EncryptionFailure
from rsaciphertext.errors import InvalidPaddingOrHash
from rsaciphertext.errors import PlaintextTooLarge
from rsaciphertext.logger import logger

HASH_TLL = {
    "SHA256": (hashlib.sha256, 32, 2**61 - 1),
    "SHA512": (hashlib.sha512, 64, 2**125 - 1),
}

# 0x00 || 0x02 || PS (at least 8 bytes) || 0x00
PKCS1_OVERHEAD = 11


class Padding(enum.Enum):
    PKCS1V15 = "PKCS1.5"
    OAEP = "OAEP"

    @classmethod
    def parse(cls, value: "str | Padding") -> "Padding":
        """Looks up a padding mode by name, ignoring case.

        Raises:
            InvalidPaddingOrHash: If the name is not a supported padding mode.
        """
        if isinstance(value, cls):
            return value
        for member in cls:
            if isinstance(value, str) and value.upper() == member.value:
                return member
        raise InvalidPaddingOrHash(f"Padding {value!r} is not one of {', '.join(m.value for m in cls)}")


class HashName(enum.Enum):
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def fun(self) -> typing.Callable:
        return HASH_TLL[self.value][0]

    @property
    def hlen(self) -> int:
        return HASH_TLL[self.value][1]

    @property
    def hcap(self) -> int:
        return HASH_TLL[self.value][2]

    @classmethod
    def parse(cls, value: "str | HashName") -> "HashName":
        """Looks up a hash algorithm by name, ignoring case.

        Raises:
            InvalidPaddingOrHash: If the name is not a supported hash algorithm.
        """
        if isinstance(value, cls):
            return value
        for member in cls:
            if isinstance(value, str) and value.upper() == member.value:
                return member
        raise InvalidPaddingOrHash(f"Hash {value!r} is not one of {', '.join(m.value for m in cls)}")


class RSAPubKey(typing.NamedTuple):
    """An RSA public key.

    Attributes:
        mod: The modulus of the key.
        expo: The public exponent of the key.
    """
    mod: int
    expo: int

    @property
    def bsize(self) -> int:
        """Length of the modulus in bytes."""
        return (self.mod.bit_length() + 7) // 8

    def c_rsa(self, message: int) -> int:
        """Performs the RSAEP primitive.

        Args:
            message: The int-marshalled message to encrypt

        Returns:
            The encrypted message

        Raises:
            ValueError: If the message is out of range for the current key.
        """
        if not 0 <= message < self.mod:
            raise ValueError("Message representative must be in range [0, mod-1]")
        return pow(message, self.expo, self.mod)

    def max_message_length(self, padding: Padding, hashf: HashName = HashName.SHA256) -> int:
        """Largest message the key can carry under the given padding.

        Negative when the key is too small for the scheme altogether.
        """
        if padding is Padding.OAEP:
            return self.bsize - 2 * hashf.hlen - 2
        return self.bsize - PKCS1_OVERHEAD

    def enc_pkcs1v15(self, message: bytes) -> bytes:
        """Encrypts the message according to the RSAES-PKCS1-v1_5 algorithm.

        Args:
            message: Message to be encrypted

        Returns:
            Padded and encrypted message, exactly `bsize` bytes long.

        Raises:
            ValueError: If the message is too long for the key.
        """
        if len(message) > self.bsize - PKCS1_OVERHEAD:
            raise ValueError("Message too long for PKCS#1 v1.5 padding")
        ps = nonzero_bytes(self.bsize - len(message) - 3)
        em = bytes_to_integer(b"\x00\x02" + ps + b"\x00" + message)
        return integer_to_bytes(self.c_rsa(em), self.bsize)

    def enc_oaep(self, message: bytes, label: bytes = b"", hashf: HashName = HashName.SHA256) -> bytes:
        """Encrypts the message according to the RSAES-OAEP algorithm.

        Args:
            message: Message to be encrypted
            label: Optional label for the message
            hashf: Hash function, used both for the label hash and MGF1.

        Returns:
            Padded and encrypted message, exactly `bsize` bytes long.

        Raises:
            ValueError: If label or message too long for the hash function.
        """
        hlen = hashf.hlen
        if len(label) > hashf.hcap:
            raise ValueError("Label too long for the specified hash function")
        if len(message) > self.bsize - 2 * (hlen + 1):
            raise ValueError("Message too long for the specified hash function")
        lh = hashf.fun(label).digest()
        pad = b"\x00" * (self.bsize - len(message) - 2 * (hlen + 1))
        db: bytes = lh + pad + b"\x01" + message
        seed = token_bytes(hlen)
        db_msk = mgf1(seed, self.bsize - hlen - 1, hashf)
        mdb = xorbytes(db, db_msk)
        seed_msk = mgf1(mdb, hlen, hashf)
        mseed = xorbytes(seed, seed_msk)
        em = bytes_to_integer(b"\x00" + mseed + mdb)
        cm = self.c_rsa(em)
        return integer_to_bytes(cm, self.bsize)

    def encrypt(self, message: bytes, padding: Padding = Padding.PKCS1V15, hashf: HashName = HashName.SHA256) -> bytes:
        """Encrypts the message with the selected padding. The hash is only consulted for OAEP."""
        if padding is Padding.OAEP:
            return self.enc_oaep(message, hashf=hashf)
        return self.enc_pkcs1v15(message)


class EncryptionRequest(typing.NamedTuple):
    plaintext: bytes
    key: RSAPubKey
    padding: Padding = Padding.PKCS1V15
    hashf: HashName = HashName.SHA256

    @classmethod
    def build(cls,
              plaintext: str | bytes,
              key: RSAPubKey,
              padding: str | Padding = Padding.PKCS1V15,
              hashf: str | HashName = HashName.SHA256) -> "EncryptionRequest":
        """Builds a request from loosely typed inputs.

        Both selectors are validated here, the hash even when it will not be used.

        Args:
            plaintext: Plaintext to encrypt. Strings are UTF-8 encoded.
            key: The validated public key.
            padding: Padding mode name, case-insensitive.
            hashf: Hash algorithm name for OAEP, case-insensitive.

        Returns:
            The request.

        Raises:
            InvalidPaddingOrHash: If either selector is not supported.
        """
        if isinstance(plaintext, str):
            plaintext = plaintext.encode("utf-8")
        return cls(plaintext, key, Padding.parse(padding), HashName.parse(hashf))


class EncryptionResult(typing.NamedTuple):
    ciphertext: bytes
    encoded: str


def encrypt(req: EncryptionRequest) -> EncryptionResult:
    """Encrypts a request.

    The plaintext length is checked against the capacity of the key and padding before anything else. Failures of the
    primitive itself, including the random source, are reported as EncryptionFailure. Nothing is retried; every call
    is independent, so the caller may simply call again.

    Args:
        req: The request to encrypt.

    Returns:
        The raw ciphertext and its standard base64 encoding.

    Raises:
        PlaintextTooLarge: If the plaintext exceeds what the key and padding can carry.
        EncryptionFailure: If the primitive fails.
    """
    maximum = req.key.max_message_length(req.padding, req.hashf)
    if len(req.plaintext) > maximum:
        raise PlaintextTooLarge(len(req.plaintext), maximum)
    if req.padding is Padding.OAEP:
        logger.debug("Encrypting %d bytes with OAEP/%s for a %d-bit key", len(req.plaintext), req.hashf.value,
                     req.key.mod.bit_length())
    else:
        logger.debug("Encrypting %d bytes with PKCS1.5 for a %d-bit key", len(req.plaintext), req.key.mod.bit_length())
    try:
        ciphertext = req.key.encrypt(req.plaintext, req.padding, req.hashf)
    except (ValueError, ArithmeticError, OSError) as err:
        raise EncryptionFailure(f"failed to encrypt with {req.padding.value}: {err}") from err
    return EncryptionResult(ciphertext, base64.b64encode(ciphertext).decode("ascii"))


def nonzero_bytes(length: int) -> bytes:
    """Draws random bytes from the CSPRNG, rejecting zeros.

    Args:
        length: Number of bytes wanted.

    Returns:
        `length` random non-zero bytes.
    """
    buf = bytearray()
    while len(buf) < length:
        buf.extend(b for b in token_bytes(length - len(buf)) if b)
    return bytes(buf)


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to an integer in accordance to preset procedures.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int) -> bytes:
    """Converts an integer to a string, using a fixed-length byte representation.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string.

    Returns:
        The representative bytes. (AKA Octet String)
    """
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def xorbytes(a: bytes, b: bytes) -> bytes:
    """XOR bitwise for bytes. Requires two byte strings of equal length."""
    return bytes(a ^ b for a, b in zip(a, b, strict=True))


def mgf1(mgfseed: bytes, masklen: int, hashf: HashName = HashName.SHA256) -> bytes:
    """The PKCS#1 v2.2 Mask Generation Function 1.

    Args:
        mgfseed: Seed for mask generation
        masklen: Intended length of mask
        hashf: Hash function

    Returns:
        The mask in form of bytes of length masklen.

    Raises:
        ValueError: If mask too long for the combination of values.
    """
    hlen = hashf.hlen
    if masklen > 2**32 * hlen:
        raise ValueError("Mask too long for the specified hash function")
    t = b""
    for cnt in range(ceil(masklen / hlen)):
        c = integer_to_bytes(cnt, 4)
        t += hashf.fun(mgfseed + c).digest()
    return t[:masklen]
