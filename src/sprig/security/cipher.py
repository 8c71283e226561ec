"""Symmetric encryption with AES-256-CBC.

Key and IV are given as hex strings (64 and 32 hex digits). Output is
base64 text, safe to store in a column or a cookie::

    cipher = Cipher(settings.key_hex, settings.iv_hex)
    token = cipher.encrypt("4111 1111 1111 1111")
    cipher.decrypt(token)          # "4111 1111 1111 1111"
    cipher.decrypt("garbage")      # None

The IV is fixed per ``Cipher``, so equal plaintexts give equal
ciphertexts. Use it for reversible obfuscation of stored values, not for
authenticated messages.
"""

import base64
import binascii

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher as BlockCipher
from cryptography.hazmat.primitives.ciphers import algorithms, modes

from sprig.errors import ConfigurationError

KEY_SIZE = 32
IV_SIZE = 16


def _from_hex(value: str, size: int, what: str) -> bytes:
    try:
        raw = bytes.fromhex(value)
    except ValueError:
        msg = f"{what} must be a hex string"
        raise ConfigurationError(msg) from None
    if len(raw) != size:
        msg = f"{what} must be {size} bytes ({size * 2} hex digits), got {len(raw)}"
        raise ConfigurationError(msg)
    return raw


class Cipher:
    """AES-256-CBC with PKCS#7 padding and base64 text output.

    ``double_base64=True`` reads and writes tokens whose ciphertext was
    base64-encoded twice, as written by older systems that encode the
    raw ciphertext and then encode the result again.
    """

    __slots__ = ("_double", "_iv", "_key")

    def __init__(self, key_hex: str, iv_hex: str, *, double_base64: bool = False) -> None:
        self._key = _from_hex(key_hex, KEY_SIZE, "Encryption key")
        self._iv = _from_hex(iv_hex, IV_SIZE, "Initialization vector")
        self._double = double_base64

    def __repr__(self) -> str:
        return "Cipher(aes-256-cbc)"

    def _block_cipher(self) -> BlockCipher:
        return BlockCipher(algorithms.AES(self._key), modes.CBC(self._iv))

    def encrypt(self, plaintext: str | bytes) -> str:
        """Encrypt *plaintext* (str is UTF-8 encoded) and return base64 text."""
        if isinstance(plaintext, str):
            plaintext = plaintext.encode("utf-8")
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext) + padder.finalize()
        encryptor = self._block_cipher().encryptor()
        token = base64.b64encode(encryptor.update(padded) + encryptor.finalize())
        if self._double:
            token = base64.b64encode(token)
        return token.decode("ascii")

    def decrypt_bytes(self, token: str | bytes) -> bytes:
        """Decrypt a token to raw bytes.

        Raises ``ValueError`` for bad base64, a ciphertext that is not a
        whole number of blocks, or bad padding.
        """
        raw = base64.b64decode(token, validate=True)
        if self._double:
            raw = base64.b64decode(raw, validate=True)
        decryptor = self._block_cipher().decryptor()
        padded = decryptor.update(raw) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        return unpadder.update(padded) + unpadder.finalize()

    def decrypt(self, token: str | bytes) -> str | None:
        """Decrypt a token to text, or ``None`` if it cannot be decrypted."""
        try:
            return self.decrypt_bytes(token).decode("utf-8")
        except (ValueError, binascii.Error):
            return None
