"""Tests for ResultService normalization and bulk-write orchestration."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from bulkctl.domain.errors import BatchRejectedError
from bulkctl.domain.outcomes import (
    DeleteError,
    DeleteOutcome,
    RawError,
    SaveOutcome,
    UpsertOutcome,
)
from bulkctl.domain.results import CanonicalError, CanonicalResult
from bulkctl.domain.types import OperationKind, StatusCode
from bulkctl.infrastructure.store import RecordStore
from bulkctl.services.results import ResultService


class FakeClient:
    """Records calls and replays canned outcomes."""

    def __init__(self, outcomes: Sequence[object] | None = None) -> None:
        self.outcomes = outcomes
        self.calls: list[tuple[OperationKind, list[Any], bool]] = []

    def bulk_write(
        self,
        operation: OperationKind,
        records: Sequence[Any],
        *,
        all_or_none: bool = False,
    ) -> Sequence[object]:
        self.calls.append((operation, list(records), all_or_none))
        if self.outcomes is not None:
            return self.outcomes
        return [SaveOutcome(True, f"id-{i}") for i, _ in enumerate(records)]


class RejectingClient:
    def bulk_write(self, operation: OperationKind, records: Sequence[Any], **_: Any) -> list[Any]:
        raise BatchRejectedError("EMPTY_BATCH", "No records submitted", operation=operation)


MIXED = [
    SaveOutcome(True, "1"),
    UpsertOutcome(False, None, (RawError("dup", "DUPLICATE_VALUE", ("email",)),)),
    DeleteOutcome(False, "3", (DeleteError("gone", "ENTITY_NOT_FOUND"),)),
    {"success": True, "id": "4"},
    object(),
    SaveOutcome(True, "6", (RawError("late", "X"),)),
]


class TestNormalizeAll:
    def test_scenario_a(self) -> None:
        raw = [
            {"success": True, "id": "1", "errors": []},
            {
                "success": False,
                "id": "2",
                "errors": [
                    {
                        "fields": ["Name"],
                        "message": "Required",
                        "statusCode": "REQUIRED_FIELD_MISSING",
                    }
                ],
            },
        ]
        assert ResultService().normalize_all(raw) == [
            CanonicalResult(record_id="1", success=True, errors=()),
            CanonicalResult(
                record_id="2",
                success=False,
                errors=(
                    CanonicalError(
                        fields=("Name",),
                        message="Required",
                        status_code="REQUIRED_FIELD_MISSING",
                    ),
                ),
            ),
        ]

    def test_scenario_b_empty(self) -> None:
        assert ResultService().normalize_all([]) == []

    def test_scenario_c_unmodeled_shape(self) -> None:
        class Opaque:
            pass

        results = ResultService().normalize_all([Opaque()])
        assert len(results) == 1
        assert results[0].success is False
        assert len(results[0].errors) == 1
        assert results[0].errors[0].status_code == StatusCode.UNRECOGNIZED_OUTCOME

    def test_length_and_order_preserved(self) -> None:
        results = ResultService().normalize_all(MIXED)
        assert len(results) == len(MIXED)
        assert [r.record_id for r in results] == ["1", None, "3", "4", None, "6"]

    def test_invariant_holds_for_every_result(self) -> None:
        for result in ResultService().normalize_all(MIXED):
            assert result.success == (len(result.errors) == 0)

    def test_errors_win_over_success(self) -> None:
        assert ResultService().normalize_all(MIXED)[5].success is False

    def test_malformed_typed_outcome_degrades_to_fallback(self) -> None:
        broken = SaveOutcome(True, "7", None)  # type: ignore[arg-type]
        results = ResultService().normalize_all([broken, SaveOutcome(True, "8")])
        assert len(results) == 2
        assert results[0].record_id == "7"
        assert results[0].success is True
        assert results[1].success is True

    def test_error_with_failing_accessor_does_not_abort_batch(self) -> None:
        class ExplodingError:
            @property
            def message(self) -> str:
                raise KeyError("message")

        class ExplodingErrors:
            def __iter__(self) -> Any:
                raise KeyError("errors")

        raw = [
            SaveOutcome(False, "1", (ExplodingError(),)),  # type: ignore[arg-type]
            SaveOutcome(False, "2", ExplodingErrors()),  # type: ignore[arg-type]
            SaveOutcome(True, "3"),
        ]
        results = ResultService().normalize_all(raw)
        assert [r.record_id for r in results] == ["1", None, "3"]
        assert results[0].success is False
        assert results[0].errors[0].message == "No message provided"
        assert results[1].errors[0].status_code == StatusCode.UNRECOGNIZED_OUTCOME
        assert results[2].success is True

    def test_mapping_error_inside_typed_outcome_keeps_detail(self) -> None:
        error = {"message": "dup", "statusCode": "DUPLICATE_VALUE"}
        raw = SaveOutcome(False, "1", (error,))  # type: ignore[arg-type]
        [result] = ResultService().normalize_all([raw])
        assert result.errors == (CanonicalError(message="dup", status_code="DUPLICATE_VALUE"),)

    def test_accepts_any_sequence(self) -> None:
        results = ResultService().normalize_all((SaveOutcome(True, "1"),))
        assert results == [CanonicalResult(record_id="1", success=True)]


class TestPerformBulkWrite:
    def test_requests_partial_success(self) -> None:
        client = FakeClient()
        ResultService(client).perform_bulk_write("update", [{"name": "a"}])
        assert client.calls == [(OperationKind.UPDATE, [{"name": "a"}], False)]

    def test_results_index_aligned(self) -> None:
        records = [{"name": "a"}, {"name": "b"}, {"name": "c"}]
        results = ResultService(FakeClient()).perform_bulk_write(OperationKind.UPDATE, records)
        assert [r.record_id for r in results] == ["id-0", "id-1", "id-2"]

    @pytest.mark.parametrize(
        ("method", "kind"),
        [
            ("bulk_update", OperationKind.UPDATE),
            ("bulk_upsert", OperationKind.UPSERT),
            ("bulk_delete", OperationKind.DELETE),
        ],
    )
    def test_wrappers(self, method: str, kind: OperationKind) -> None:
        client = FakeClient()
        getattr(ResultService(client), method)(["x"])
        assert client.calls[0][0] is kind

    def test_invalid_operation_rejected_before_client(self) -> None:
        client = FakeClient()
        with pytest.raises(BatchRejectedError) as excinfo:
            ResultService(client).perform_bulk_write("merge", [{"name": "a"}])
        assert excinfo.value.code == "INVALID_OPERATION"
        assert client.calls == []

    def test_collaborator_rejection_propagates(self) -> None:
        with pytest.raises(BatchRejectedError) as excinfo:
            ResultService(RejectingClient()).bulk_update([])
        assert excinfo.value.code == "EMPTY_BATCH"

    def test_misaligned_outcomes_rejected(self) -> None:
        client = FakeClient(outcomes=[SaveOutcome(True, "1")])
        with pytest.raises(BatchRejectedError) as excinfo:
            ResultService(client).bulk_update([{"name": "a"}, {"name": "b"}])
        assert excinfo.value.code == "OUTCOME_COUNT_MISMATCH"

    def test_no_client_is_programming_error(self) -> None:
        with pytest.raises(RuntimeError):
            ResultService().bulk_update([{"name": "a"}])


class TestWithRecordStore:
    def test_partial_failure_does_not_abort_batch(self, store: RecordStore) -> None:
        results = ResultService(store).bulk_update(
            [{"name": "Ada"}, {"email": "x@example.com"}, {"name": "Grace"}]
        )
        assert [r.success for r in results] == [True, False, True]
        assert results[1].errors[0].status_code == StatusCode.REQUIRED_FIELD_MISSING
        assert results[1].errors[0].fields == ("name",)
        assert store.count() == 2

    def test_oversized_integer_fails_only_its_record(self, store: RecordStore) -> None:
        records = [{"name": "ok"}, {"name": "big", "owner": 2**70}]
        results = ResultService(store).bulk_update(records)
        assert [r.success for r in results] == [True, False]
        assert results[1].errors[0].status_code == StatusCode.INVALID_TYPE_ON_FIELD
        assert store.count() == 1

    def test_upsert_then_delete(self, store: RecordStore) -> None:
        svc = ResultService(store)
        first = svc.bulk_upsert([{"external_id": "A-1", "name": "Ada"}])
        second = svc.bulk_upsert([{"external_id": "A-1", "name": "Ada L."}])
        assert first[0].record_id == second[0].record_id
        deleted = svc.bulk_delete([first[0].record_id, "rec_missing"])
        assert [r.success for r in deleted] == [True, False]
        assert deleted[1].errors[0].fields == ()

    def test_empty_batch_rejected(self, store: RecordStore) -> None:
        with pytest.raises(BatchRejectedError):
            ResultService(store).bulk_delete([])
