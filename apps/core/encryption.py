import base64
import hashlib
import logging

from cryptography.fernet import Fernet, InvalidToken
from django.conf import settings

logger = logging.getLogger(__name__)


class SymmetricEncryption:
    """
    Fernet (AES) encryption for sensitive profile values.
    Uses ENCRYPTION_KEY from settings.
    """

    def __init__(self, key=None):
        key = key or settings.ENCRYPTION_KEY
        if isinstance(key, str):
            # Plain strings are hashed into a 32-byte url-safe key
            key = base64.urlsafe_b64encode(hashlib.sha256(key.encode()).digest())
        self.fernet = Fernet(key)

    def encrypt(self, plain_text: str) -> str:
        if not plain_text:
            return ""
        return self.fernet.encrypt(plain_text.encode()).decode()

    def decrypt(self, encrypted_text: str) -> str:
        if not encrypted_text:
            return ""
        try:
            return self.fernet.decrypt(encrypted_text.encode()).decode()
        except InvalidToken:
            logger.error("decrypt_failed reason=invalid_token")
            raise


_encryption_instance = None


def get_encryption():
    global _encryption_instance
    if _encryption_instance is None:
        _encryption_instance = SymmetricEncryption()
    return _encryption_instance


def encrypt_value(value: str) -> str:
    return get_encryption().encrypt(value)


def decrypt_value(value: str) -> str:
    return get_encryption().decrypt(value)


def mask_value(value: str, visible: int = 4) -> str:
    """``'1234567890'`` -> ``'******7890'``"""
    if not value:
        return ""
    value = str(value)
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
