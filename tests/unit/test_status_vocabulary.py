"""Tests for status normalization."""

import pytest

from src.domain.status import canonical_statuses, is_canonical_status, normalize_status
from src.domain.task import TaskStatus


@pytest.mark.unit
class TestNormalizeStatus:
    """Tests for normalize_status."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Pendente", TaskStatus.PENDING),
            ("Em Andamento", TaskStatus.IN_PROGRESS),
            ("Em progresso", TaskStatus.IN_PROGRESS),
            ("In Progress", TaskStatus.IN_PROGRESS),
            ("Concluido", TaskStatus.COMPLETED),
            ("Concluído", TaskStatus.COMPLETED),
            ("Finalizado", TaskStatus.COMPLETED),
            ("Finalizada", TaskStatus.COMPLETED),
            ("Completo", TaskStatus.COMPLETED),
            ("Completa", TaskStatus.COMPLETED),
        ],
    )
    def test_known_synonyms(self, raw, expected):
        """Each synonym maps to its canonical status."""
        assert normalize_status(raw) == expected.value

    @pytest.mark.parametrize("variant", ["CONCLUÍDO", "concluido", "  Concluído ", "cOnClUiDo"])
    def test_case_and_accent_variants_agree(self, variant):
        """Case, accents and surrounding whitespace do not matter."""
        assert normalize_status(variant) == "Completed"

    def test_em_andamento_variants(self):
        """Internal whitespace is collapsed before matching."""
        assert normalize_status("em   andamento") == "InProgress"

    @pytest.mark.parametrize("status", list(TaskStatus))
    def test_canonical_values_are_fixed_points(self, status):
        """Canonical values normalize to themselves."""
        assert normalize_status(status.value) == status.value

    def test_lowercase_canonical_is_normalized(self):
        """A lowercase canonical name is a known spelling."""
        assert normalize_status("pending") == "Pending"
        assert normalize_status("inprogress") == "InProgress"

    @pytest.mark.parametrize("raw", ["Done", "Blocked", "", "Pending!"])
    def test_unknown_passes_through(self, raw):
        """Unrecognized text is returned unchanged."""
        assert normalize_status(raw) == raw

    @pytest.mark.parametrize("raw", [None, 3, ["Pending"]])
    def test_non_string_passes_through(self, raw):
        """Non-string input is left for validation to reject."""
        assert normalize_status(raw) == raw


@pytest.mark.unit
class TestIsCanonicalStatus:
    """Tests for is_canonical_status."""

    def test_accepts_exact_members(self):
        assert all(is_canonical_status(value) for value in canonical_statuses())

    @pytest.mark.parametrize("value", ["pending", "Pendente", "In Progress", "", None, 1])
    def test_rejects_everything_else(self, value):
        assert is_canonical_status(value) is False

    def test_canonical_order(self):
        assert canonical_statuses() == ["Pending", "InProgress", "Completed"]
