"""Unit tests for the error hierarchy."""

from datetime import date

from journai.errors import (
    CompletionError,
    CompletionServiceError,
    DuplicateKey,
    JournaiError,
    MalformedModelOutput,
    NoOutput,
    PromptBuildError,
    StorageError,
    StoreError,
)


class TestErrors:
    """Tests for error classes."""

    def test_all_are_journai_errors(self) -> None:
        for error in (
            PromptBuildError("x"),
            CompletionServiceError("x"),
            NoOutput(),
            MalformedModelOutput("x"),
            DuplicateKey(date(2024, 3, 1)),
            StorageError("x"),
        ):
            assert isinstance(error, JournaiError)

    def test_no_output_is_not_service_error(self) -> None:
        """Test the two completion failures stay distinct."""
        assert isinstance(NoOutput(), CompletionError)
        assert not isinstance(NoOutput(), CompletionServiceError)

    def test_duplicate_key_is_not_storage_error(self) -> None:
        """Test that conflicts can be told apart from outages."""
        error = DuplicateKey(date(2024, 3, 1))
        assert isinstance(error, StoreError)
        assert not isinstance(error, StorageError)
        assert error.date == date(2024, 3, 1)
        assert "2024-03-01" in str(error)

    def test_service_error_status_code(self) -> None:
        assert CompletionServiceError("x", status_code=401).status_code == 401
        assert CompletionServiceError("x").status_code is None
