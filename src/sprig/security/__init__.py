"""Encryption helpers."""

from sprig.security.cipher import Cipher

__all__ = ["Cipher"]
