from bomgraph.core.identity import PackageDescriptor
from bomgraph.core.roots import DependencyNode, DependencyTree, find_roots


def _node(name: str, version: str, *locations: str) -> DependencyNode:
    return DependencyNode(
        bom_ref=f"pkg:npm/{name}@{version}",
        descriptor=PackageDescriptor(name=name, version=version),
        locations=set(locations),
    )


def _tree() -> DependencyTree:
    tree = DependencyTree()
    app = tree.add_node(_node("app", "1.0.0", "/srv/app"))
    tools = tree.add_node(_node("tools", "0.3.0", "/srv/app/packages/tools"))
    lodash = tree.add_node(_node("lodash", "4.17.21", "/srv/app/node_modules/lodash"))
    orphan = tree.add_node(_node("orphan", "1.0.0", "/srv/app/node_modules/orphan"))
    app.add_dependency(lodash)
    tools.add_dependency(lodash)
    assert orphan.required_by == []
    return tree


def test_roots_are_unrequired_and_outside_vendor_dirs():
    tree = _tree()
    roots = find_roots(tree)
    assert [node.descriptor.name for node in roots] == ["app", "tools"]
    assert all(node.root_package for node in roots)
    assert tree.get("lodash", "4.17.21").root_package is False
    assert tree.get("orphan", "1.0.0").root_package is False


def test_find_roots_is_idempotent():
    tree = _tree()
    first = {node.bom_ref for node in find_roots(tree)}
    second = {node.bom_ref for node in find_roots(tree)}
    assert first == second
    assert len(tree.roots) == 2


def test_mixed_locations_count_as_first_party():
    tree = DependencyTree()
    tree.add_node(_node("shared", "2.0.0", "/srv/app/node_modules/shared"))
    tree.add_node(_node("shared", "2.0.0", "/srv/app/libs/shared"))
    assert [node.descriptor.name for node in find_roots(tree)] == ["shared"]
    assert tree.get("shared", "2.0.0").locations == {"/srv/app/node_modules/shared", "/srv/app/libs/shared"}


def test_custom_vendor_dirs_and_versions_are_separate_nodes():
    tree = DependencyTree()
    tree.add_node(_node("lib", "1.0.0", "/srv/app/vendor/lib"))
    tree.add_node(_node("lib", "2.0.0", "/srv/app/lib"))
    roots = find_roots(tree, vendor_dirs=("vendor",))
    assert [node.descriptor.version for node in roots] == ["2.0.0"]
    assert set(tree.lookup_map["lib"].versions) == {"1.0.0", "2.0.0"}


def test_node_without_locations_is_not_a_root():
    tree = DependencyTree()
    tree.add_node(_node("ghost", "1.0.0"))
    assert find_roots(tree) == []
