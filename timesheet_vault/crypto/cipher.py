"""
Password-based AES-256-CBC in the OpenSSL ``Salted__`` format.

Output is interchangeable with CryptoJS ``AES.encrypt(text, password)`` and
``openssl enc -aes-256-cbc -md md5 -a``: base64 of the 8-byte magic, an
8-byte random salt, then the PKCS7-padded CBC ciphertext. Key and IV come
from ``EVP_BytesToKey`` with MD5 and a single iteration.
"""

import base64
import binascii
import hashlib
import os
from collections.abc import Callable

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from timesheet_vault.exceptions import CryptoError

_MAGIC = b"Salted__"
_SALT_SIZE = 8
_KEY_SIZE = 32
_IV_SIZE = 16
_BLOCK_BITS = 128


def evp_bytes_to_key(password: bytes, salt: bytes, key_len: int, iv_len: int) -> tuple[bytes, bytes]:
    """
    OpenSSL EVP_BytesToKey with MD5, one iteration.

    Args:
        password: Password bytes.
        salt: 8-byte salt.
        key_len: Key length in bytes.
        iv_len: IV length in bytes.

    Returns:
        Tuple of (key, iv).
    """
    derived = b""
    block = b""
    while len(derived) < key_len + iv_len:
        block = hashlib.md5(block + password + salt).digest()
        derived += block
    return derived[:key_len], derived[key_len : key_len + iv_len]


class OpenSSLAesCipher:
    """AES-256-CBC password cipher producing OpenSSL-compatible base64 output."""

    def __init__(self, *, salt_factory: Callable[[], bytes] | None = None) -> None:
        """
        Args:
            salt_factory: Callable returning 8 salt bytes. Defaults to os.urandom.
        """
        self._salt_factory = salt_factory or (lambda: os.urandom(_SALT_SIZE))

    def encrypt(self, plaintext: str, password: str) -> str:
        if not password:
            msg = "Password must not be empty"
            raise CryptoError(msg)

        salt = self._salt_factory()
        if len(salt) != _SALT_SIZE:
            msg = f"Salt must be {_SALT_SIZE} bytes, got {len(salt)}"
            raise CryptoError(msg)

        key, iv = evp_bytes_to_key(password.encode("utf-8"), salt, _KEY_SIZE, _IV_SIZE)

        padder = padding.PKCS7(_BLOCK_BITS).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv), backend=default_backend()).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return base64.b64encode(_MAGIC + salt + ciphertext).decode("ascii")

    def decrypt(self, ciphertext: str, password: str) -> str:
        try:
            raw = base64.b64decode(ciphertext, validate=True)
        except (binascii.Error, ValueError) as e:
            msg = "Ciphertext is not valid base64"
            raise CryptoError(msg) from e

        header_size = len(_MAGIC) + _SALT_SIZE
        if len(raw) < header_size + _BLOCK_BITS // 8 or not raw.startswith(_MAGIC):
            msg = "Ciphertext is missing the Salted__ header"
            raise CryptoError(msg)

        body = raw[header_size:]
        if len(body) % (_BLOCK_BITS // 8) != 0:
            msg = "Ciphertext length is not a multiple of the block size"
            raise CryptoError(msg)

        salt = raw[len(_MAGIC) : header_size]
        key, iv = evp_bytes_to_key(password.encode("utf-8"), salt, _KEY_SIZE, _IV_SIZE)

        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv), backend=default_backend()).decryptor()
        padded = decryptor.update(body) + decryptor.finalize()

        try:
            unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
            data = unpadder.update(padded) + unpadder.finalize()
            return data.decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            msg = "Decryption failed, possibly wrong password"
            raise CryptoError(msg) from e
