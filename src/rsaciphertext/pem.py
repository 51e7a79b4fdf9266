"""PEM block extraction for key material handed over as plain text.

Typical usage example:

    label, der = decode_pem(text)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii
import re
import typing

PEM_BLOCK = re.compile(r"^[ \t]*-----BEGIN ([^\r\n-]*)-----[ \t\r]*$(.*?)^[ \t]*-----END \1-----",
                       re.MULTILINE | re.DOTALL)


class PEMBlock(typing.NamedTuple):
    label: str
    payload: bytes


def iter_pem(text: str) -> typing.Iterator[PEMBlock]:
    """Iterate over every decodable PEM block in the text.

    Candidates whose body is not valid base64 (for example ones carrying RFC 1421 headers) are not considered PEM
    blocks and skipped, anything surrounding the blocks is ignored.

    Args:
        text: Text that may contain PEM blocks.

    Yields:
        The label and decoded payload of each block, in order of appearance.
    """
    for match in PEM_BLOCK.finditer(text):
        body = "".join(match.group(2).split())
        try:
            payload = base64.b64decode(body, validate=True)
        except binascii.Error:
            continue
        yield PEMBlock(match.group(1).strip(), payload)


def decode_pem(text: str) -> PEMBlock | None:
    """Decodes the first PEM block found in the text.

    Args:
        text: Text that may contain PEM blocks.

    Returns:
        The first block, or None if there is none.
    """
    return next(iter_pem(text), None)
