import sys
import os
import tempfile
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

# Add the parent directory to sys.path to import the clockixl package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from clockixl.errors import ValidationError
from clockixl.keystore import KeyStore
from clockixl.server import create_app

class TestKeyStore(unittest.TestCase):
    """Test the plaintext API key store."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "nested", "api_key.txt")
        self.store = KeyStore(self.path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_get_without_saved_key(self):
        self.assertEqual(self.store.get(), "")

    def test_save_and_get(self):
        self.store.save("  abc123 \n")
        self.assertEqual(self.store.get(), "abc123")
        self.store.save("def456")
        self.assertEqual(self.store.get(), "def456")

    def test_save_empty_key(self):
        for value in ("", "   ", None):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    self.store.save(value)
        self.assertFalse(os.path.exists(self.path))

    def test_delete(self):
        self.store.save("abc123")
        self.store.delete()
        self.assertEqual(self.store.get(), "")
        self.store.delete()  # nothing left to delete

    def test_path_from_environment(self):
        with patch.dict('os.environ', {'CLOCKIXL_KEY_FILE': self.path}):
            self.assertEqual(str(KeyStore().path), self.path)

class TestKeyStoreServer(unittest.TestCase):
    """Test the HTTP endpoints around the key store."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.store = KeyStore(os.path.join(self.tmp.name, "api_key.txt"))
        self.client = TestClient(create_app(self.store))

    def tearDown(self):
        self.tmp.cleanup()

    def test_get_empty(self):
        resp = self.client.get("/api/key")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"apiKey": ""})

    def test_post_get_delete(self):
        resp = self.client.post("/api/key", json={"apiKey": " abc123 "})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"success": True, "message": "API key saved"})
        self.assertEqual(self.client.get("/api/key").json(), {"apiKey": "abc123"})

        resp = self.client.delete("/api/key")
        self.assertEqual(resp.json(), {"success": True, "message": "API key deleted"})
        self.assertEqual(self.client.get("/api/key").json(), {"apiKey": ""})

    def test_post_empty_key(self):
        for body in ({"apiKey": ""}, {}):
            with self.subTest(body=body):
                resp = self.client.post("/api/key", json=body)
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json()["detail"], "API key is required")

    def test_post_invalid_payload(self):
        """A missing body, broken JSON or a list as key is a 400, not a 422."""
        requests = [
            {},
            {"json": {"apiKey": ["abc"]}},
            {"content": b"not json", "headers": {"Content-Type": "application/json"}},
        ]
        for kwargs in requests:
            with self.subTest(kwargs=kwargs):
                resp = self.client.post("/api/key", **kwargs)
                self.assertEqual(resp.status_code, 400)
                self.assertEqual(resp.json(), {"detail": "API key is required"})
        self.assertEqual(self.store.get(), "")

    def test_read_failure(self):
        with patch.object(KeyStore, 'get', side_effect=OSError("disk")):
            resp = self.client.get("/api/key")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["detail"], "Failed to read API key")

if __name__ == '__main__':
    unittest.main()
