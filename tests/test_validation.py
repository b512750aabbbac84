"""
Unit tests for request validation rules and messages.
"""
import pytest

from yelpcamp.validation import (
    CampgroundCreate,
    CampgroundUpdate,
    CommentCreate,
    CommentUpdate,
    ListQuery,
    LoginRequest,
    RegisterRequest,
    validate,
)

VALID_CAMPGROUND = {
    "name": "Test Camp",
    "price": "10.00",
    "image": "https://x.com/i.jpg",
    "description": "d",
}


class TestCampgroundCreateValidation:
    """Tests for campground create bodies."""

    def test_valid_body_is_trimmed(self):
        """Text fields are stored trimmed."""
        result = validate(CampgroundCreate, {**VALID_CAMPGROUND, "name": "  Test Camp  ", "location": " Moab "})
        assert result.success
        assert result.data.name == "Test Camp"
        assert result.data.location == "Moab"

    def test_location_is_optional(self):
        result = validate(CampgroundCreate, VALID_CAMPGROUND)
        assert result.success
        assert result.data.location is None

    def test_empty_location_becomes_null(self):
        result = validate(CampgroundCreate, {**VALID_CAMPGROUND, "location": "   "})
        assert result.success
        assert result.data.location is None

    @pytest.mark.parametrize("field,message", [
        ("name", "Campground name is required"),
        ("price", "Price is required"),
        ("description", "Description is required"),
        ("image", "Must be a valid URL"),
    ])
    def test_blank_required_field(self, field, message):
        """Whitespace-only values fail the emptiness check after trimming."""
        result = validate(CampgroundCreate, {**VALID_CAMPGROUND, field: "   "})
        assert not result.success
        assert result.error == message

    def test_missing_name(self):
        body = dict(VALID_CAMPGROUND)
        del body["name"]
        result = validate(CampgroundCreate, body)
        assert result.error == "Campground name is required"

    def test_name_length_boundary(self):
        assert validate(CampgroundCreate, {**VALID_CAMPGROUND, "name": "a" * 100}).success

        result = validate(CampgroundCreate, {**VALID_CAMPGROUND, "name": "a" * 101})
        assert result.error == "Name must be less than 100 characters"

    def test_description_too_long(self):
        result = validate(CampgroundCreate, {**VALID_CAMPGROUND, "description": "a" * 5001})
        assert result.error == "Description must be less than 5000 characters"

    def test_location_too_long(self):
        result = validate(CampgroundCreate, {**VALID_CAMPGROUND, "location": "a" * 201})
        assert result.error == "Location must be less than 200 characters"

    def test_invalid_url(self):
        result = validate(CampgroundCreate, {**VALID_CAMPGROUND, "image": "not a url"})
        assert result.error == "Must be a valid URL"

    def test_only_first_error_is_reported(self):
        result = validate(CampgroundCreate, {"name": "", "price": "", "image": "", "description": ""})
        assert result.error == "Campground name is required"

    def test_non_object_body(self):
        result = validate(CampgroundCreate, ["not", "an", "object"])
        assert not result.success
        assert result.error == "Invalid request body"


class TestCampgroundUpdateValidation:
    """Tests for partial campground updates."""

    def test_empty_body_changes_nothing(self):
        result = validate(CampgroundUpdate, {})
        assert result.success
        assert result.data.changes() == {}

    def test_only_sent_fields_change(self):
        result = validate(CampgroundUpdate, {"name": " Renamed "})
        assert result.data.changes() == {"name": "Renamed"}

    def test_present_but_empty_name_is_rejected(self):
        result = validate(CampgroundUpdate, {"name": ""})
        assert result.error == "Campground name is required"

    @pytest.mark.parametrize("value", [None, ""])
    def test_location_can_be_cleared(self, value):
        result = validate(CampgroundUpdate, {"location": value})
        assert result.success
        assert result.data.changes() == {"location": None}


class TestCommentValidation:
    """Tests for comment bodies."""

    def test_valid_comment(self):
        result = validate(CommentCreate, {"campgroundId": 3, "text": "  Great  "})
        assert result.success
        assert result.data.campground_id == 3
        assert result.data.text == "Great"

    @pytest.mark.parametrize("campground_id", [0, -1, "3", 1.5, True])
    def test_invalid_campground_id(self, campground_id):
        result = validate(CommentCreate, {"campgroundId": campground_id, "text": "Great"})
        assert result.error == "Invalid campground ID"

    def test_missing_campground_id(self):
        result = validate(CommentCreate, {"text": "Great"})
        assert result.error == "Invalid campground ID"

    def test_blank_text(self):
        result = validate(CommentCreate, {"campgroundId": 1, "text": "   "})
        assert result.error == "Comment text is required"

    def test_text_length_boundary(self):
        assert validate(CommentUpdate, {"text": "a" * 500}).success
        assert validate(CommentUpdate, {"text": "a" * 501}).error == "Comment must be less than 500 characters"


class TestListQueryValidation:
    """Tests for list query parameters."""

    def test_defaults(self):
        query = validate(ListQuery, {}).data
        assert query.page == 1
        assert query.limit == 12
        assert query.search is None
        assert query.offset == 0

    def test_string_numbers_are_coerced(self):
        query = validate(ListQuery, {"page": "2", "limit": "5"}).data
        assert query.page == 2
        assert query.limit == 5
        assert query.offset == 5

    @pytest.mark.parametrize("page", ["0", "-1", "abc", "1.5"])
    def test_invalid_page(self, page):
        assert validate(ListQuery, {"page": page}).error == "Page must be a positive integer"

    def test_limit_cap(self):
        assert validate(ListQuery, {"limit": "50"}).success
        assert validate(ListQuery, {"limit": "51"}).error == "Limit must be at most 50"

    def test_blank_search_is_ignored(self):
        assert validate(ListQuery, {"search": "   "}).data.search is None


class TestAuthValidation:
    """Tests for register and login bodies."""

    VALID = {"username": "camper1", "email": "camper@example.com", "password": "secret1"}

    def test_valid_registration(self):
        result = validate(RegisterRequest, {**self.VALID, "name": " Happy Camper "})
        assert result.success
        assert result.data.name == "Happy Camper"

    @pytest.mark.parametrize("username,message", [
        ("ab", "Username must be 3-30 characters"),
        ("a" * 31, "Username must be 3-30 characters"),
        ("john_camper", "Username must contain only letters and numbers"),
    ])
    def test_invalid_username(self, username, message):
        assert validate(RegisterRequest, {**self.VALID, "username": username}).error == message

    def test_invalid_email(self):
        result = validate(RegisterRequest, {**self.VALID, "email": "not-an-email"})
        assert result.error == "Must be a valid email address"

    def test_short_password(self):
        result = validate(RegisterRequest, {**self.VALID, "password": "12345"})
        assert result.error == "Password must be at least 6 characters"

    def test_login_requires_username(self):
        result = validate(LoginRequest, {"password": "secret1"})
        assert result.error == "Username is required"

    def test_login_accepts_any_non_empty_password(self):
        assert validate(LoginRequest, {"username": "tester", "password": "abc"}).success
        assert validate(LoginRequest, {"username": "tester", "password": ""}).error == "Password is required"
