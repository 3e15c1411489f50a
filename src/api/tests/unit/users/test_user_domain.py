"""Unit tests for the User value and UserPatch."""

from users.domain import UserPatch


class TestUserPatch:
    """Tests for UserPatch."""

    def test_empty_patch(self):
        """A patch with no fields supplied is empty."""
        patch = UserPatch()

        assert patch.is_empty()
        assert patch.as_values() == {}

    def test_only_supplied_fields_are_values(self):
        """Omitted fields are not part of the update values."""
        patch = UserPatch(name="Bob")

        assert not patch.is_empty()
        assert patch.as_values() == {"name": "Bob"}

    def test_empty_string_counts_as_supplied(self):
        """An empty string is a supplied value, distinct from omission."""
        patch = UserPatch(email="")

        assert not patch.is_empty()
        assert patch.as_values() == {"email": ""}


class TestUser:
    """Tests for the User value."""

    def test_str_shows_id_and_email(self, sample_user):
        assert str(sample_user) == "User(1, alice@example.com)"
