"""Tests for the create_user command."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from app.models import User
from app.scripts import create_user
from support import DatabaseTestCase


class TestCreateUserCommand(DatabaseTestCase):
    def run_command(self, *argv: str) -> tuple[int, str]:
        err = io.StringIO()
        with patch.object(create_user, "get_settings", return_value=self.settings):
            with redirect_stdout(io.StringIO()), redirect_stderr(err):
                code = create_user.main(list(argv))
        return code, err.getvalue()

    def test_creates_admin(self) -> None:
        code, _ = self.run_command("Boss@X.com", "password123", "admin", "--first-name", "Ada")
        self.assertEqual(code, 0)
        user = self.db.query(User).filter_by(email="boss@x.com").one()
        self.assertEqual(user.role, "admin")
        self.assertEqual(user.first_name, "Ada")

    def test_duplicate_email(self) -> None:
        self.assertEqual(self.run_command("dup@x.com", "password123")[0], 0)
        code, err = self.run_command("DUP@x.com", "password123")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)

    def test_invalid_email(self) -> None:
        for email in ("no-at-sign", "a@.com", "a@b..c"):
            with self.subTest(email=email):
                code, err = self.run_command(email, "password123")
                self.assertEqual(code, 1)
                self.assertIn("Invalid email", err)
        self.assertEqual(self.db.query(User).count(), 0)

    def test_short_password(self) -> None:
        code, err = self.run_command("a@x.com", "short")
        self.assertEqual(code, 1)
        self.assertIn("Password must be", err)


if __name__ == "__main__":
    unittest.main()
