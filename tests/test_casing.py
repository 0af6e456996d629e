"""Tests for the casing module."""

import pytest

from lexgen.casing import split_words, to_camel, to_pascal, to_screaming_snake, to_snake


class TestSplitWords:
    """Test tokenization across casing conventions."""

    def test_camel(self):
        assert split_words("createSession") == ["create", "Session"]

    def test_pascal(self):
        assert split_words("CreateSession") == ["Create", "Session"]

    def test_snake(self):
        assert split_words("create_session") == ["create", "session"]

    def test_screaming(self):
        assert split_words("SCREAMING_CASE") == ["SCREAMING", "CASE"]

    def test_acronym_run(self):
        """A capital run is greedy and takes the next word's capital too."""
        assert split_words("getDIDDoc") == ["get", "DIDD", "oc"]

    def test_digits_stay_in_word(self):
        assert split_words("getV2Blob") == ["get", "V2", "Blob"]

    def test_non_identifier_characters_dropped(self):
        assert split_words("com.atproto-server") == ["com", "atproto", "server"]

    def test_empty(self):
        assert split_words("") == []


class TestToSnake:
    """Test conversion to snake_case."""

    def test_create_session(self):
        assert to_snake("createSession") == "create_session"

    def test_pascal(self):
        assert to_snake("ResolveHandle") == "resolve_handle"

    def test_screaming(self):
        assert to_snake("SCREAMING_CASE") == "screaming_case"

    def test_already_snake(self):
        assert to_snake("access_jwt") == "access_jwt"

    def test_empty(self):
        assert to_snake("") == ""

    def test_only_separators(self):
        assert to_snake("__--") == ""


class TestToPascal:
    """Test conversion to PascalCase."""

    def test_create_session(self):
        assert to_pascal("createSession") == "CreateSession"

    def test_screaming(self):
        assert to_pascal("SCREAMING_CASE") == "ScreamingCase"

    def test_snake(self):
        assert to_pascal("describe_server") == "DescribeServer"

    def test_single_character_words_uppercased(self):
        assert to_pascal("a_b_c") == "ABC"

    def test_empty(self):
        assert to_pascal("") == ""

    @pytest.mark.parametrize("name", [
        "createSession",
        "SCREAMING_CASE",
        "resolve_handle",
        "getV2Blob",
        "inviteCodeRequired",
    ])
    def test_stable_under_repeated_application(self, name):
        """Re-tokenizing a PascalCase result derives the same words."""
        once = to_pascal(name)
        assert to_pascal(once) == once

    def test_snake_then_pascal(self):
        assert to_pascal(to_snake("createSession")) == "CreateSession"


class TestOtherCasings:
    """Test camelCase and SCREAMING_SNAKE_CASE output."""

    def test_camel_from_snake(self):
        assert to_camel("access_jwt") == "accessJwt"

    def test_camel_from_screaming(self):
        assert to_camel("INVITE_CODE") == "inviteCode"

    def test_camel_empty(self):
        assert to_camel("") == ""

    def test_screaming_from_camel(self):
        assert to_screaming_snake("createSession") == "CREATE_SESSION"

    def test_screaming_from_pascal(self):
        assert to_screaming_snake("ResolveHandle") == "RESOLVE_HANDLE"
