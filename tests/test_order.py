# Tests for cfsync.sync.order
# Execution order and sync plans

from conftest import asset_link, build_asset, build_entry, entry_link

from cfsync.graph.resolver import DependencyResolver
from cfsync.graph.types import ItemKind, NodeKey
from cfsync.sync.order import build_execution_order, count_skipped, plan


def _keys(nodes):
    return [str(node.key) for node in nodes]


class TestExecutionOrder:
    """Tests for build_execution_order."""

    def test_single_entry(self, client):
        client.add_entry(build_entry("solo"))
        graph = DependencyResolver(client).resolve("solo")
        assert _keys(build_execution_order(graph)) == ["entry:solo"]

    def test_children_before_parent(self, site_client):
        graph = DependencyResolver(site_client).resolve("homepage-1")
        order = _keys(build_execution_order(graph))

        assert order[-1] == "entry:homepage-1"
        assert order.index("asset:logo") < order.index("entry:offer-1")
        assert order.index("asset:logo") < order.index("entry:about-1")
        assert order.index("asset:hero") < order.index("entry:homepage-1")

    def test_full_order(self, site_client):
        graph = DependencyResolver(site_client).resolve("homepage-1")
        assert _keys(build_execution_order(graph)) == [
            "asset:hero",
            "asset:logo",
            "entry:offer-1",
            "entry:about-1",
            "entry:homepage-1",
        ]

    def test_assets_before_entry_children(self, client):
        client.add_entry(
            build_entry("page", first=entry_link("card"), image=asset_link("pic"), second=entry_link("teaser"))
        )
        client.add_entry(build_entry("card", "card"))
        client.add_entry(build_entry("teaser", "teaser"))
        client.add_asset(build_asset("pic"))
        graph = DependencyResolver(client).resolve("page")

        assert _keys(build_execution_order(graph)) == [
            "asset:pic",
            "entry:card",
            "entry:teaser",
            "entry:page",
        ]

    def test_each_key_once(self, site_client):
        graph = DependencyResolver(site_client).resolve("homepage-1")
        order = _keys(build_execution_order(graph))
        assert len(order) == len(set(order)) == 5

    def test_entry_loop_clone_not_scheduled(self, client):
        client.add_entry(build_entry("a", "typeA", ref=entry_link("b")))
        client.add_entry(build_entry("b", "typeB", ref=entry_link("a")))
        graph = DependencyResolver(client).resolve("a")

        assert _keys(build_execution_order(graph)) == ["entry:b", "entry:a"]

    def test_content_type_loop_excluded(self, client):
        client.add_entry(build_entry("offer-1", "offer", home=entry_link("homepage-1")))
        client.add_entry(build_entry("homepage-1", "homepage", offer=entry_link("offer-2")))
        client.add_entry(build_entry("offer-2", "offer", home=entry_link("homepage-1")))
        graph = DependencyResolver(client).resolve("offer-1")

        assert _keys(build_execution_order(graph)) == ["entry:homepage-1", "entry:offer-1"]
        assert count_skipped(graph) == 1


class TestPlan:
    """Tests for sync plans."""

    def test_plan_contents(self, site_client):
        graph = DependencyResolver(site_client).resolve("homepage-1")
        sync_plan = plan(graph)

        assert sync_plan.total == 5
        assert [entry.id for entry in sync_plan.entries] == ["offer-1", "about-1", "homepage-1"]
        assert [asset.id for asset in sync_plan.assets] == ["hero", "logo"]
        assert sync_plan.order[0] == NodeKey(ItemKind.ASSET, "hero")
        assert sync_plan.skipped == 0

    def test_plan_does_not_write(self, site_client):
        graph = DependencyResolver(site_client).resolve("homepage-1")
        plan(graph)
        assert site_client.write_log == []
        assert site_client.target_entries == {}
