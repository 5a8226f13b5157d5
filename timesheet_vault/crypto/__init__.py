"""
Cryptographic operations for Timesheet Vault.

This module provides:
- The password cipher protocol used by the upload pipeline
- OpenSSL/CryptoJS-compatible AES-256-CBC password encryption
"""

from timesheet_vault.crypto.cipher import OpenSSLAesCipher, evp_bytes_to_key
from timesheet_vault.crypto.protocol import PasswordCipher

__all__ = [
    "PasswordCipher",
    "OpenSSLAesCipher",
    "evp_bytes_to_key",
]
