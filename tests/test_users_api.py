"""HTTP tests for /users: profile, password, settings, directory and the admin-only list."""

import unittest
from unittest.mock import patch

from app.models import User, UserSettings
from support import ApiTestCase, add_user


class TestProfile(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = add_user(self.db, "me@x.com", first_name="Old", last_name="Name")

    def test_update_profile(self) -> None:
        r = self.client.put(
            self.url("/users/profile"),
            headers=self.auth(self.user),
            json={"first_name": " New ", "last_name": "Person", "email": "Me.New@X.com"},
        )
        self.assertEqual(r.status_code, 200)
        user = r.json()["user"]
        self.assertEqual(user["first_name"], "New")
        self.assertEqual(user["email"], "me.new@x.com")

    def test_email_of_another_account_is_409(self) -> None:
        add_user(self.db, "taken@x.com")
        r = self.client.put(
            self.url("/users/profile"),
            headers=self.auth(self.user),
            json={"first_name": "A", "last_name": "B", "email": "taken@x.com"},
        )
        self.assertEqual(r.status_code, 409)
        self.assertEqual(r.json()["error"], "conflict")

    def test_email_claimed_concurrently_is_409(self) -> None:
        add_user(self.db, "late@x.com")
        with patch("app.services.accounts._email_taken", return_value=False):
            r = self.client.put(
                self.url("/users/profile"),
                headers=self.auth(self.user),
                json={"first_name": "A", "last_name": "B", "email": "late@x.com"},
            )
        self.assertEqual(r.status_code, 409)
        self.db.expire_all()
        self.assertEqual(self.db.get(User, self.user.id).email, "me@x.com")

    def test_keeping_own_email_is_fine(self) -> None:
        r = self.client.put(
            self.url("/users/profile"),
            headers=self.auth(self.user),
            json={"first_name": "A", "last_name": "B", "email": "me@x.com"},
        )
        self.assertEqual(r.status_code, 200)


class TestChangePassword(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = add_user(self.db, "pw@x.com", "secret123")

    def test_wrong_current_password(self) -> None:
        r = self.client.put(
            self.url("/users/change-password"),
            headers=self.auth(self.user),
            json={"current_password": "nope-nope", "new_password": "brand-new-pass"},
        )
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["error"], "invalid_password")

    def test_new_password_replaces_old(self) -> None:
        r = self.client.put(
            self.url("/users/change-password"),
            headers=self.auth(self.user),
            json={"current_password": "secret123", "new_password": "brand-new-pass"},
        )
        self.assertEqual(r.status_code, 200)
        old = self.client.post(self.url("/auth/login"), json={"email": "pw@x.com", "password": "secret123"})
        new = self.client.post(self.url("/auth/login"), json={"email": "pw@x.com", "password": "brand-new-pass"})
        self.assertEqual(old.status_code, 401)
        self.assertEqual(new.status_code, 200)

    def test_short_new_password_is_400(self) -> None:
        r = self.client.put(
            self.url("/users/change-password"),
            headers=self.auth(self.user),
            json={"current_password": "secret123", "new_password": "short"},
        )
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["error"], "validation_error")


class TestSettings(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = add_user(self.db, "s@x.com")
        self.other = add_user(self.db, "t@x.com")

    def test_defaults_without_row(self) -> None:
        r = self.client.get(self.url("/users/settings"), headers=self.auth(self.user))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(
            r.json(),
            {"profile_visibility": "public", "email_notifications": True, "app_notifications": True},
        )
        self.assertEqual(self.db.query(UserSettings).count(), 0)

    def test_notification_settings_upsert(self) -> None:
        headers = self.auth(self.user)
        for app_notifications in (False, True):
            r = self.client.put(
                self.url("/users/notification-settings"),
                headers=headers,
                json={"email_notifications": False, "app_notifications": app_notifications},
            )
            self.assertEqual(r.status_code, 200)
            self.assertEqual(r.json()["settings"]["app_notifications"], app_notifications)
        self.assertEqual(self.db.query(UserSettings).filter_by(user_id=self.user.id).count(), 1)
        # Another account still sees defaults.
        r = self.client.get(self.url("/users/settings"), headers=self.auth(self.other))
        self.assertTrue(r.json()["email_notifications"])

    def test_privacy_settings(self) -> None:
        headers = self.auth(self.user)
        r = self.client.put(self.url("/users/privacy-settings"), headers=headers, json={"profile_visibility": "private"})
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["settings"]["profile_visibility"], "private")
        r = self.client.get(self.url("/users/settings"), headers=headers)
        self.assertEqual(r.json()["profile_visibility"], "private")

    def test_privacy_value_validated(self) -> None:
        r = self.client.put(
            self.url("/users/privacy-settings"),
            headers=self.auth(self.user),
            json={"profile_visibility": "everyone"},
        )
        self.assertEqual(r.status_code, 400)


class TestUserLists(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = add_user(self.db, "admin@x.com", role="admin", first_name="Zed")
        self.user = add_user(self.db, "user@x.com", first_name="Amy")

    def test_admin_lists_users(self) -> None:
        r = self.client.get(self.url("/users"), headers=self.auth(self.admin))
        self.assertEqual(r.status_code, 200)
        emails = [u["email"] for u in r.json()["users"]]
        self.assertEqual(emails, ["admin@x.com", "user@x.com"])
        self.assertNotIn("password_hash", r.json()["users"][0])

    def test_user_cannot_list_users(self) -> None:
        r = self.client.get(self.url("/users"), headers=self.auth(self.user))
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json()["error"], "forbidden")

    def test_directory_ordered_by_name(self) -> None:
        r = self.client.get(self.url("/users/directory"), headers=self.auth(self.user))
        self.assertEqual(r.status_code, 200)
        self.assertEqual([u["first_name"] for u in r.json()], ["Amy", "Zed"])


if __name__ == "__main__":
    unittest.main()
