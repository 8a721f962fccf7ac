"""
Crypto helpers for the web-nonce login
"""

import secrets
from base64 import b64decode
from typing import Tuple

from Crypto.Cipher import AES, PKCS1_OAEP
from Crypto.Hash import HMAC, SHA1
from Crypto.PublicKey import RSA
from Crypto.Random import get_random_bytes
from Crypto.Util.Padding import pad

# Valve's public "universe" key
STEAM_PUBLIC_KEY = b64decode(
    "MIGdMA0GCSqGSIb3DQEBAQUAA4GLADCBhwKBgQDf7BrWLBBmLBc1OhSwfFkRf53T"
    "2Ct64+AVzRkeRuh7h3SiGEYxqQMUeYKO6UWiSRKpI2hzic9pobFhRr3Bvr/WARvY"
    "gdTckPv+T1JzZsuVcNfFjrocejN1oWI0Rrtgt4Bo+hOneoo3S57G9F1fOpn5nsQ6"
    "6WOiu4gZKODnFMBCiQIBEQ=="
)

SESSION_KEY_SIZE = 32
IV_RANDOM_SIZE = 3


def generate_session_id() -> str:
    """Random 12-byte hex session id, the format Steam uses for sessionid"""
    return secrets.token_hex(12)


def generate_session_key() -> Tuple[bytes, bytes]:
    """
    Create a fresh AES session key.

    Returns:
        tuple: (plain key, key encrypted with Valve's public key using RSA-OAEP/SHA1)
    """
    plain = get_random_bytes(SESSION_KEY_SIZE)
    cipher = PKCS1_OAEP.new(RSA.import_key(STEAM_PUBLIC_KEY), hashAlgo=SHA1)
    return plain, cipher.encrypt(plain)


def symmetric_encrypt_with_iv(message: bytes, key: bytes, iv: bytes) -> bytes:
    """AES-256: the IV encrypted with ECB, followed by the CBC ciphertext"""
    encrypted_iv = AES.new(key, AES.MODE_ECB).encrypt(iv)
    ciphertext = AES.new(key, AES.MODE_CBC, iv).encrypt(pad(message, AES.block_size))
    return encrypted_iv + ciphertext


def symmetric_encrypt_with_hmac_iv(message, key: bytes) -> bytes:
    """
    Encrypt with an IV of HMAC-SHA1(random + message)[:13] + random.

    The HMAC secret is the first 16 bytes of the session key.
    """
    if isinstance(message, str):
        message = message.encode('utf-8')

    random_part = get_random_bytes(IV_RANDOM_SIZE)
    hmac = HMAC.new(key[:16], random_part + message, digestmod=SHA1).digest()
    iv = hmac[:AES.block_size - IV_RANDOM_SIZE] + random_part
    return symmetric_encrypt_with_iv(message, key, iv)
