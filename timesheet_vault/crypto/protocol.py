"""
Password cipher protocol definition.

This defines the interface for password-based encryption, allowing different
implementations to be swapped without changing the upload pipeline.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class PasswordCipher(Protocol):
    """
    Abstract interface for password-based symmetric encryption.

    Implementations derive their key, IV and salt internally and embed
    whatever they need in the ciphertext. Callers treat the output as an
    opaque string.
    """

    def encrypt(self, plaintext: str, password: str) -> str:
        """
        Encrypt text under a password.

        Args:
            plaintext: Text to encrypt.
            password: User-supplied password.

        Returns:
            Self-contained ciphertext string.

        Raises:
            CryptoError: If encryption fails.
        """
        ...

    def decrypt(self, ciphertext: str, password: str) -> str:
        """
        Decrypt a ciphertext produced by ``encrypt``.

        Raises:
            CryptoError: If the ciphertext is malformed or the password is wrong.
        """
        ...
