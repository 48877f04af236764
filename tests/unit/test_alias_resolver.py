"""
Unit tests for AliasResolver and CanonicalResolver.
"""

import pytest

from navigation_resolver.exceptions import (DataAccessError, DataQualityError,
                                            ErrorCategory, ErrorSeverity)
from navigation_resolver.models import Scenario
from navigation_resolver.resolvers import AliasResolver, CanonicalResolver
from navigation_resolver.store import InMemoryOperationStore
from tests.fixtures.operation_store import (
    ORG_A,
    ORG_B,
    PLATFORM_SCOPE,
    FailingOperationStore,
    make_alias,
    make_operation,
)


@pytest.mark.asyncio
class TestAliasResolver:
    """Tests for alias lookup, suffix gating and relationship following."""

    async def test_alias_with_allowed_tail(self, sample_store, settings):
        resolver = AliasResolver(sample_store, settings)

        result = await resolver.resolve(ORG_A, "/wm/customers/new")

        assert result is not None
        assert result.component_id == "EntityWizard:CUSTOMER"
        assert result.scenario is Scenario.CREATE
        assert result.alias_hit is True
        assert result.tail == "/new"
        assert result.alias_path == "/wm/customers"
        assert result.canonical_path == "/enterprise/customers"

    async def test_bare_alias_path_resolves_to_list(self, sample_store, settings):
        result = await AliasResolver(sample_store, settings).resolve(ORG_A, "/wm/customers")

        assert result is not None
        assert result.tail == ""
        assert result.scenario is Scenario.LIST

    async def test_tail_not_in_suffixes_is_rejected(self, settings):
        store = InMemoryOperationStore(
            operations=[make_operation(op_id="op-wizard", component_id="EntityWizard:CUSTOMER")],
            aliases=[make_alias(route_suffixes=["new"])],
        )
        resolver = AliasResolver(store, settings)

        assert await resolver.resolve(ORG_A, "/wm/customers/edit") is None
        assert (await resolver.resolve(ORG_A, "/wm/customers/new")).tail == "/new"

    async def test_empty_suffix_list_accepts_any_tail(self, settings):
        store = InMemoryOperationStore(
            operations=[make_operation(op_id="op-wizard", scenario=Scenario.DETAIL)],
            aliases=[make_alias(route_suffixes=[])],
        )

        result = await AliasResolver(store, settings).resolve(ORG_A, "/wm/customers/view")

        assert result is not None
        assert result.tail == "/view"
        assert result.scenario is Scenario.DETAIL

    async def test_rejected_alias_does_not_stop_scan(self, settings):
        """A later alias for the same path can still match."""
        store = InMemoryOperationStore(
            operations=[
                make_operation(op_id="op-create", component_id="EntityWizard:CUSTOMER"),
                make_operation(
                    op_id="op-edit",
                    canonical_path="/enterprise/customers/editor",
                    component_id="EntityEditor:CUSTOMER",
                    scenario=Scenario.DETAIL,
                ),
            ],
            aliases=[
                make_alias(alias_id="a1", target_id="op-create", route_suffixes=["new"]),
                make_alias(alias_id="a2", target_id="op-edit", route_suffixes=["edit"]),
            ],
        )

        result = await AliasResolver(store, settings).resolve(ORG_A, "/wm/customers/edit")

        assert result.operation_id == "op-edit"
        assert result.scenario is Scenario.DETAIL

    async def test_dangling_alias_is_skipped(self, settings):
        store = InMemoryOperationStore(
            operations=[make_operation(op_id="op-live", component_id="EntityWizard:CUSTOMER")],
            aliases=[
                make_alias(alias_id="dangling-none", target_id=None),
                make_alias(alias_id="dangling-missing", target_id="op-deleted"),
                make_alias(alias_id="live", target_id="op-live"),
            ],
        )

        result = await AliasResolver(store, settings).resolve(ORG_A, "/wm/customers/new")

        assert result.operation_id == "op-live"

    async def test_only_dangling_aliases_returns_none(self, settings):
        store = InMemoryOperationStore(aliases=[make_alias(target_id="op-deleted")])

        assert await AliasResolver(store, settings).resolve(ORG_A, "/wm/customers") is None

    async def test_aliases_are_read_from_platform_scope(self, mock_store, settings):
        await AliasResolver(mock_store, settings).resolve(ORG_B, "/wm/customers/new")

        mock_store.find_aliases.assert_awaited_once_with(PLATFORM_SCOPE, "/wm/customers")

    async def test_alias_lookup_uses_base_path_only(self, sample_store, settings):
        """No prefix rewriting for aliases: '/salon/customers' has no alias."""
        result = await AliasResolver(sample_store, settings).resolve(ORG_A, "/salon/customers/new")

        assert result is None

    async def test_store_failure_returns_none(self, settings, recording_observer):
        resolver = AliasResolver(FailingOperationStore(), settings, recording_observer)

        assert await resolver.resolve(ORG_A, "/wm/customers/new") is None

        (error,), = recording_observer.args_for("on_error")
        assert isinstance(error, DataAccessError)
        assert error.category is ErrorCategory.DATA_ACCESS
        assert error.context.stage == "alias"
        assert error.context.path == "/wm/customers/new"
        assert isinstance(error.original_exception, ConnectionError)

    async def test_lookup_raises_data_access_error(self, settings):
        with pytest.raises(DataAccessError, match="Alias lookup failed"):
            await AliasResolver(FailingOperationStore(), settings).lookup(ORG_A, "/wm/customers")

    async def test_target_lookup_failure_is_degraded(self, settings, mock_store):
        mock_store.find_aliases.return_value = [make_alias()]
        mock_store.get_alias_target.side_effect = TimeoutError("slow store")

        assert await AliasResolver(mock_store, settings).resolve(ORG_A, "/wm/customers") is None


@pytest.mark.asyncio
class TestCanonicalResolver:
    """Tests for canonical path lookup over generated candidates."""

    async def test_resolves_industry_path_via_enterprise_candidate(self, settings):
        store = InMemoryOperationStore(operations=[make_operation()])

        result = await CanonicalResolver(store, settings).resolve(ORG_A, "/jewelry/customers/new")

        assert result.operation_id == "op-customers"
        assert result.alias_hit is False
        assert result.tail == "/new"
        assert result.scenario is Scenario.CREATE
        assert result.alias_path is None

    async def test_exact_canonical_path(self, settings):
        store = InMemoryOperationStore(
            operations=[make_operation(scenario=Scenario.DETAIL)]
        )

        result = await CanonicalResolver(store, settings).resolve(
            ORG_A, "/enterprise/customers/view"
        )

        assert result.scenario is Scenario.DETAIL
        assert result.tail == "/view"

    async def test_descriptor_scenario_kept_for_approve_tail(self, sample_store, settings):
        result = await CanonicalResolver(sample_store, settings).resolve(
            ORG_A, "/wm/journal-entries/approve"
        )

        assert result.component_id == "JournalEntryApproval"
        assert result.scenario is Scenario.APPROVE

    async def test_queries_candidate_set_in_requested_scope(self, mock_store, settings):
        await CanonicalResolver(mock_store, settings).resolve(ORG_B, "/wm/customers/new")

        mock_store.find_operations.assert_awaited_once()
        scope, candidates = mock_store.find_operations.await_args.args
        assert scope == ORG_B
        assert candidates[0] == "/wm/customers"
        assert "/enterprise/customers" in candidates

    async def test_other_scope_does_not_match(self, settings):
        store = InMemoryOperationStore(operations=[make_operation(scope=ORG_B)])

        assert await CanonicalResolver(store, settings).resolve(ORG_A, "/enterprise/customers") is None

    async def test_deprecated_operation_is_ignored(self, settings, mock_store):
        mock_store.find_operations.return_value = [make_operation(deprecated=True)]

        assert await CanonicalResolver(mock_store, settings).resolve(ORG_A, "/enterprise/customers") is None

    async def test_duplicate_canonical_paths_pick_first_and_report(
        self, settings, recording_observer
    ):
        store = InMemoryOperationStore(
            operations=[
                make_operation(op_id="op-first"),
                make_operation(op_id="op-second"),
            ]
        )
        resolver = CanonicalResolver(store, settings, recording_observer)

        result = await resolver.resolve(ORG_A, "/enterprise/customers")

        assert result.operation_id == "op-first"
        (scope, path, matches), = recording_observer.args_for("on_ambiguous_match")
        assert [m.id for m in matches] == ["op-first", "op-second"]

    async def test_earlier_candidate_wins_over_store_order(self, settings, mock_store):
        """The unmodified input is tried first even if the store returns it last."""
        mock_store.find_operations.return_value = [
            make_operation(op_id="op-enterprise", canonical_path="/enterprise/customers"),
            make_operation(op_id="op-surface", canonical_path="/wm/customers"),
        ]

        result = await CanonicalResolver(mock_store, settings).resolve(ORG_A, "/wm/customers")

        assert result.operation_id == "op-surface"

    async def test_store_failure_returns_none(self, settings, recording_observer):
        resolver = CanonicalResolver(FailingOperationStore(), settings, recording_observer)

        assert await resolver.resolve(ORG_A, "/wm/customers") is None
        assert recording_observer.hooks() == ["on_error"]

    async def test_parameters_pass_through(self, settings):
        store = InMemoryOperationStore(
            operations=[make_operation(parameters={"entity_type": "CUSTOMER", "page_size": 50})]
        )

        result = await CanonicalResolver(store, settings).resolve(ORG_A, "/enterprise/customers")

        assert result.parameters == {"entity_type": "CUSTOMER", "page_size": 50}


@pytest.mark.asyncio
class TestMalformedStoreRows:
    """Rows that are not operation descriptors degrade like store failures."""

    @pytest.mark.parametrize(
        "rows",
        [
            None,
            [{"id": "op-raw", "canonical_path": "/enterprise/customers"}],
            [object()],
        ],
    )
    async def test_canonical_rows_degrade_to_none(
        self, settings, mock_store, recording_observer, rows
    ):
        mock_store.find_operations.return_value = rows
        resolver = CanonicalResolver(mock_store, settings, recording_observer)

        assert await resolver.resolve(ORG_A, "/enterprise/customers") is None

        (error,), = recording_observer.args_for("on_error")
        assert isinstance(error, DataAccessError)
        assert error.context.stage == "canonical"

    async def test_canonical_lookup_raises_data_access_error(self, settings, mock_store):
        mock_store.find_operations.return_value = None

        with pytest.raises(DataAccessError, match="Canonical lookup failed"):
            await CanonicalResolver(mock_store, settings).lookup(ORG_A, "/enterprise/customers")


@pytest.mark.asyncio
class TestDanglingAliasReporting:
    async def test_dangling_alias_reported_as_data_quality(self, settings, recording_observer):
        store = InMemoryOperationStore(aliases=[make_alias(alias_id="a-gone", target_id="op-gone")])

        result = await AliasResolver(store, settings, recording_observer).resolve(
            ORG_A, "/wm/customers"
        )

        assert result is None
        (error,), = recording_observer.args_for("on_error")
        assert isinstance(error, DataQualityError)
        assert error.category is ErrorCategory.DATA_QUALITY
        assert error.severity is ErrorSeverity.WARNING
        assert error.context.metadata == {"alias_id": "a-gone", "target_id": "op-gone"}

    async def test_live_alias_after_dangling_one_still_resolves(
        self, settings, recording_observer
    ):
        store = InMemoryOperationStore(
            operations=[make_operation(op_id="op-wizard")],
            aliases=[make_alias(alias_id="a-gone", target_id="op-gone"), make_alias()],
        )

        result = await AliasResolver(store, settings, recording_observer).resolve(
            ORG_A, "/wm/customers/new"
        )

        assert result.operation_id == "op-wizard"
        assert len(recording_observer.args_for("on_error")) == 1
