"""Tests for contact PII encryption."""

import pytest
from cryptography.fernet import Fernet

from vault import ContactBundle, ContactCodec, DecryptionError, derive_key, generate_secret


class TestRoundTrip:

    def test_decrypt_restores_plaintext(self, codec):
        payload = '{"name": "Ada", "city": "London"}'
        assert codec.decrypt(codec.encrypt(payload)) == payload

    def test_contact_bundle_round_trip(self, codec, contact):
        token = codec.encrypt_contact(contact)
        assert codec.decrypt_contact(token) == contact

    def test_ciphertext_hides_plaintext(self, codec, contact):
        token = codec.encrypt_contact(contact)
        assert "Lovelace" not in token
        assert "ada@example.com" not in token

    def test_same_secret_decrypts_across_instances(self, contact):
        token = ContactCodec("shared-secret").encrypt_contact(contact)
        assert ContactCodec("shared-secret").decrypt_contact(token) == contact

    def test_empty_plaintext_is_rejected(self, codec):
        with pytest.raises(ValueError):
            codec.encrypt("")


class TestTamperDetection:

    def test_tampered_token_raises(self, codec):
        token = codec.encrypt("secret payload")
        tampered = token[:-6] + ("A" if token[-6] != "A" else "B") + token[-5:]
        with pytest.raises(DecryptionError):
            codec.decrypt(tampered)

    def test_garbage_raises(self, codec):
        with pytest.raises(DecryptionError):
            codec.decrypt("not-a-token")

    def test_wrong_secret_raises(self, codec):
        token = ContactCodec("another-secret").encrypt("payload")
        with pytest.raises(DecryptionError):
            codec.decrypt(token)

    def test_empty_payload_raises(self, codec):
        # A token carrying an empty payload, written with the same key
        token = Fernet(derive_key("test-pii-secret")).encrypt(b"").decode()
        with pytest.raises(DecryptionError):
            codec.decrypt(token)

    def test_non_contact_payload_raises(self, codec):
        token = codec.encrypt('["not", "a", "bundle"]')
        with pytest.raises(DecryptionError):
            codec.decrypt_contact(token)


class TestRotation:

    def test_retired_secret_still_decrypts(self, contact):
        old = ContactCodec("old-secret")
        token = old.encrypt_contact(contact)

        current = ContactCodec("new-secret", retired_secrets=["old-secret"])
        assert current.decrypt_contact(token) == contact

    def test_rotate_moves_token_to_current_secret(self, contact):
        token = ContactCodec("old-secret").encrypt_contact(contact)
        current = ContactCodec("new-secret", retired_secrets=["old-secret"])

        rotated = current.rotate(token)

        assert ContactCodec("new-secret").decrypt_contact(rotated) == contact

    def test_new_tokens_use_current_secret(self, contact):
        current = ContactCodec("new-secret", retired_secrets=["old-secret"])
        token = current.encrypt_contact(contact)

        with pytest.raises(DecryptionError):
            ContactCodec("old-secret").decrypt_contact(token)


class TestKeys:

    def test_derivation_is_deterministic(self):
        assert derive_key("abc") == derive_key("abc")
        assert derive_key("abc") != derive_key("abd")

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            ContactCodec("")

    def test_generated_secrets_differ(self):
        assert generate_secret() != generate_secret()


class TestContactBundle:

    def test_missing_fields_lists_blanks(self):
        bundle = ContactBundle(first_name="Ada", last_name="  ", email="a@b.c")
        missing = bundle.missing_fields()
        assert "last_name" in missing
        assert "first_name" not in missing
        assert "country" in missing

    def test_display_name(self, contact):
        assert contact.display_name == "Ada Lovelace"
