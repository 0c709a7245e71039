"""Unit tests for password hashing."""

from fluent_admin.kernel.identity.password import PasswordHasher


class TestPasswordHasher:
    """Tests for PasswordHasher."""

    hasher = PasswordHasher(rounds=4)

    def test_hash_creates_different_hashes(self):
        """Same password should create different hashes (due to salt)."""
        password = "admin123"
        hash1 = self.hasher.hash(password)
        hash2 = self.hasher.hash(password)

        assert hash1 != hash2
        assert hash1.startswith("$2b$")  # bcrypt prefix

    def test_verify_correct_password(self):
        """Correct password should verify successfully."""
        hashed = self.hasher.hash("admin123")

        assert self.hasher.verify("admin123", hashed) is True

    def test_verify_wrong_password(self):
        """Wrong password should fail verification."""
        hashed = self.hasher.hash("admin123")

        assert self.hasher.verify("admin124", hashed) is False

    def test_malformed_hash_is_a_mismatch(self):
        assert self.hasher.verify("admin123", "not-a-bcrypt-hash") is False

    def test_hash_made_with_other_cost_still_verifies(self):
        hashed = PasswordHasher(rounds=5).hash("admin123")

        assert self.hasher.verify("admin123", hashed) is True

    def test_burn_runs_without_a_stored_hash(self):
        """The dummy check used for unknown usernames never raises."""
        self.hasher.burn("whatever")
        self.hasher.burn("whatever again")
