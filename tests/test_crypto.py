"""Tests for the web-nonce encryption helpers."""

import unittest

from Crypto.Cipher import AES
from Crypto.Util.Padding import unpad

from steam_web.utils.crypto import generate_session_id, symmetric_encrypt_with_hmac_iv


class TestCrypto(unittest.TestCase):

    def test_hmac_iv_ciphertext_decrypts_to_message(self):
        key = bytes(range(32))
        encrypted = symmetric_encrypt_with_hmac_iv('webnonce123', key)

        iv = AES.new(key, AES.MODE_ECB).decrypt(encrypted[:16])
        plain = unpad(AES.new(key, AES.MODE_CBC, iv).decrypt(encrypted[16:]), AES.block_size)
        self.assertEqual(plain, b'webnonce123')

    def test_each_encryption_uses_a_new_iv(self):
        key = bytes(32)
        self.assertNotEqual(symmetric_encrypt_with_hmac_iv(b'nonce', key),
                            symmetric_encrypt_with_hmac_iv(b'nonce', key))

    def test_session_id_format(self):
        session_id = generate_session_id()
        self.assertEqual(len(session_id), 24)
        int(session_id, 16)


if __name__ == '__main__':
    unittest.main()
