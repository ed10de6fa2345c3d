"""
Tests for Headers and Row
"""

import pytest

from tablestream.core.errors import DuplicateColumn, MissingColumn
from tablestream.core.headers import Headers
from tablestream.core.row import Row


class TestRow:
    """Test Row type"""

    def test_fields_are_strings(self):
        """Test that fields are coerced to str"""
        row = Row([1, "a", 2.5])
        assert row == ("1", "a", "2.5")

    def test_append_returns_new_row(self):
        """Test that append does not mutate the original"""
        row = Row.of("1", "Norway")
        longer = row.append("Norwegian")

        assert row == ("1", "Norway")
        assert longer == ("1", "Norway", "Norwegian")
        assert isinstance(longer, Row)

    def test_replace(self):
        """Test replacing one field"""
        assert Row.of("a", "b", "c").replace(1, "B") == Row.of("a", "B", "c")


class TestHeadersConstruction:
    """Test building headers"""

    def test_from_row(self):
        """Test building from a header row"""
        headers = Headers.from_row(Row.of("ID", "Country"))

        assert headers.names == ["ID", "Country"]
        assert headers.index_of("ID") == 0
        assert headers.index_of("Country") == 1
        assert headers.row == Row.of("ID", "Country")

    def test_from_row_duplicate(self):
        """Test that duplicate names are rejected"""
        with pytest.raises(DuplicateColumn) as exc_info:
            Headers.from_row(["A", "B", "A"])

        assert exc_info.value.name == "A"

    def test_push(self):
        """Test pushing new columns"""
        headers = Headers()

        assert headers.push("A")
        assert headers.push("B")
        assert headers.names == ["A", "B"]
        assert headers.index_of("B") == 1

    def test_push_duplicate_is_rejected(self):
        """Test that pushing an existing name is a no-op"""
        headers = Headers(["A", "B"])

        assert not headers.push("A")
        assert headers.names == ["A", "B"]
        assert len(headers) == 2


class TestHeadersRename:
    """Test renaming columns"""

    def test_rename_keeps_position(self):
        """Test that rename keeps the column position"""
        headers = Headers(["ID", "Country", "Population"])
        headers.rename("Country", "COUNTRY")

        assert headers.names == ["ID", "COUNTRY", "Population"]
        assert headers.index_of("COUNTRY") == 1
        assert headers.index_of("Country") is None

    def test_rename_missing(self):
        """Test renaming a column that does not exist"""
        headers = Headers(["ID", "Country"])
        before = headers.copy()

        with pytest.raises(MissingColumn):
            headers.rename("Nope", "Other")

        assert headers == before

    def test_rename_duplicate(self):
        """Test renaming onto an existing column"""
        headers = Headers(["ID", "Country"])
        before = headers.copy()

        with pytest.raises(DuplicateColumn):
            headers.rename("ID", "Country")

        assert headers == before
        assert headers.index_of("ID") == 0
        assert headers.index_of("Country") == 1


class TestHeadersLookup:
    """Test field lookup"""

    def test_field_of_after_push_and_rename(self):
        """Test that lookups follow pushes and renames"""
        headers = Headers(["ID", "Country"])
        headers.push("Language")
        headers.rename("Country", "Nation")
        rows = [Row.of("1", "Norway", "Norwegian"), Row.of("2", "Tuvalu", "Tuvaluan")]

        assert [headers.field_of(row, "Nation") for row in rows] == ["Norway", "Tuvalu"]
        assert [headers.field_of(row, "Language") for row in rows] == ["Norwegian", "Tuvaluan"]
        assert [headers.field_of(row, "ID") for row in rows] == ["1", "2"]

    def test_field_of_unknown_name(self):
        """Test lookup of a name that does not exist"""
        headers = Headers(["ID"])
        assert headers.field_of(Row.of("1"), "Country") is None

    def test_field_of_short_row(self):
        """Test lookup past the end of a short row"""
        headers = Headers(["ID", "Country"])
        assert headers.field_of(Row.of("1"), "Country") is None

    def test_contains(self):
        """Test membership"""
        headers = Headers(["ID"])
        assert "ID" in headers
        assert headers.contains("ID")
        assert "Country" not in headers


class TestHeadersCopy:
    """Test that copies are independent"""

    def test_copy_is_independent(self):
        """Test that mutating a copy leaves the original alone"""
        headers = Headers(["A"])
        clone = headers.copy()
        clone.push("B")
        clone.rename("A", "Z")

        assert headers.names == ["A"]
        assert headers.index_of("A") == 0
        assert clone.names == ["Z", "B"]

    def test_equality(self):
        """Test that headers compare by name row"""
        assert Headers(["A", "B"]) == Headers(["A", "B"])
        assert Headers(["A", "B"]) != Headers(["B", "A"])
