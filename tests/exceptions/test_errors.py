"""Tests for the exception hierarchy."""

import pytest

from less_census.exceptions import (
    AnalysisError,
    CensusError,
    ConfigurationError,
    FileAccessError,
    FrozenStoreError,
    InvalidConfigError,
    MissingPathError,
    NestingDepthError,
    ParseError,
    WorkerError,
    WorkerTransportError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error_class, parent",
        [
            (ParseError, AnalysisError),
            (FileAccessError, AnalysisError),
            (NestingDepthError, ParseError),
            (InvalidConfigError, ConfigurationError),
            (MissingPathError, ConfigurationError),
            (WorkerTransportError, WorkerError),
            (AnalysisError, CensusError),
            (ConfigurationError, CensusError),
            (WorkerError, CensusError),
            (FrozenStoreError, CensusError),
        ],
    )
    def test_parent(self, error_class, parent):
        assert issubclass(error_class, parent)


class TestCensusError:
    def test_message_only(self):
        assert str(CensusError("boom")) == "boom"

    def test_details_are_appended(self):
        error = CensusError("boom", details={"a": "1", "b": "2"})
        assert str(error) == "boom (a=1, b=2)"
        assert error.message == "boom"


class TestParseError:
    """Parse errors carry reason, path and line."""

    def test_fields(self):
        error = ParseError("expected ':'", filepath="a.less", line=3)
        assert error.reason == "expected ':'"
        assert error.filepath == "a.less"
        assert error.line == 3
        assert str(error) == "Failed to parse a.less (reason=expected ':', filepath=a.less, line=3)"

    def test_without_path(self):
        error = ParseError("bad", line=1)
        assert error.filepath is None
        assert str(error) == "Failed to parse (reason=bad, line=1)"

    def test_with_path(self):
        error = ParseError("bad", line=2).with_path("b.less")
        assert error.filepath == "b.less"
        assert error.line == 2
        assert "b.less" in str(error)

    def test_nesting_error_keeps_its_type_with_path(self):
        error = NestingDepthError(64, line=9).with_path("deep.less")
        assert isinstance(error, NestingDepthError)
        assert error.limit == 64
        assert error.filepath == "deep.less"
        assert "deep.less" in str(error)
        assert "64" in error.reason


class TestOtherErrors:
    def test_file_access_error(self):
        error = FileAccessError("x.less", "Permission denied")
        assert error.filepath == "x.less"
        assert error.reason == "Permission denied"

    def test_missing_path(self):
        assert MissingPathError("gone/").path == "gone/"

    def test_worker_transport_error(self):
        error = WorkerTransportError(2, "worker exited before reporting", exitcode=-9)
        assert error.worker_id == 2
        assert error.exitcode == -9
        assert "exitcode=-9" in str(error)

    def test_frozen_store_error(self):
        assert FrozenStoreError("colors").section == "colors"

    def test_invalid_config_error(self):
        error = InvalidConfigError("top", -1, "must be non-negative")
        assert error.key == "top"
        assert error.value == -1
