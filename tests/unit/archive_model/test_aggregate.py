"""Tests for size aggregation and ordering of archive trees."""

from __future__ import annotations

import random
import unittest

from archivetree.archive_model import (
    ArchiveEntry,
    ArchiveTree,
    BuildLimits,
    DirectoryNode,
    FileNode,
    TreeStructureError,
    build_and_finalize,
    build_archive_tree,
    finalize_archive_tree,
    iter_files,
    name_sort_key,
)


def sample_entries() -> list[ArchiveEntry]:
    return [
        ArchiveEntry(entry_name="README.md", raw_size=120, compressed_size=80),
        ArchiveEntry(entry_name="src/", is_directory=True),
        ArchiveEntry(entry_name="src/main.py", raw_size=2000, compressed_size=700),
        ArchiveEntry(entry_name="src/util/helpers.py", raw_size=500, compressed_size=210),
        ArchiveEntry(entry_name="src/util/Zeta.py", raw_size=30, compressed_size=30),
        ArchiveEntry(entry_name="src/util/alpha.py", raw_size=40, compressed_size=35),
        ArchiveEntry(entry_name="assets/img/logo.png", raw_size=9000, compressed_size=8900),
        ArchiveEntry(entry_name="assets/Fonts/", is_directory=True),
        ArchiveEntry(entry_name="LICENSE", raw_size=1000, compressed_size=400),
        ArchiveEntry(entry_name="empty/", is_directory=True),
    ]


def tree_shape(tree: ArchiveTree) -> object:
    def shape(node: DirectoryNode | FileNode) -> object:
        if isinstance(node, DirectoryNode):
            return (
                "dir",
                node.entry_name,
                node.explicit,
                node.aggregate_raw_size,
                node.aggregate_compressed_size,
                [shape(child) for child in node.children],
            )
        return ("file", node.entry_name, node.raw_size, node.compressed_size)

    return [shape(node) for node in tree.roots]


class AggregateSizeTests(unittest.TestCase):
    def test_directory_aggregate_equals_sum_of_descendant_files(self) -> None:
        tree = build_and_finalize(sample_entries())

        for directory in tree.directory_index.values():
            files = list(iter_files(directory))
            self.assertEqual(directory.aggregate_raw_size, sum(node.raw_size for node in files))
            self.assertEqual(directory.aggregate_compressed_size, sum(node.compressed_size for node in files))

        self.assertEqual(tree.directory_index["src"].aggregate_raw_size, 2570)
        self.assertEqual(tree.directory_index["src/util"].aggregate_compressed_size, 275)
        self.assertEqual(tree.directory_index["empty"].aggregate_raw_size, 0)

    def test_directory_size_labels_follow_aggregates(self) -> None:
        tree = build_and_finalize(sample_entries())

        assets = tree.directory_index["assets"]
        self.assertEqual(assets.size_label, "9 KB")
        self.assertEqual(assets.compressed_size_label, "8.9 KB")
        self.assertEqual(tree.directory_index["empty"].size_label, "0 B")

    def test_finalize_marks_tree(self) -> None:
        tree = build_archive_tree(sample_entries())
        self.assertFalse(tree.finalized)
        self.assertIs(finalize_archive_tree(tree), tree)
        self.assertTrue(tree.finalized)


class OrderingTests(unittest.TestCase):
    def assert_ordered(self, nodes: list[DirectoryNode | FileNode]) -> None:
        seen_file = False
        for node in nodes:
            if isinstance(node, FileNode):
                seen_file = True
            else:
                self.assertFalse(seen_file, "directory listed after a file")
        for group in (
            [node for node in nodes if isinstance(node, DirectoryNode)],
            [node for node in nodes if isinstance(node, FileNode)],
        ):
            keys = [name_sort_key(node.name) for node in group]
            self.assertEqual(keys, sorted(keys))

    def test_directories_precede_files_at_every_level(self) -> None:
        tree = build_and_finalize(sample_entries())

        self.assert_ordered(tree.roots)
        for directory in tree.directory_index.values():
            self.assert_ordered(directory.children)
        self.assertEqual([node.name for node in tree.roots], ["assets", "empty", "src", "LICENSE", "README.md"])
        self.assertEqual(
            [node.name for node in tree.directory_index["src/util"].children],
            ["alpha.py", "helpers.py", "Zeta.py"],
        )
        self.assertEqual([node.name for node in tree.directory_index["assets"].children], ["Fonts", "img"])

    def test_name_sort_key_is_case_and_accent_insensitive_first(self) -> None:
        names = ["b", "B", "a", "Á", "á", "A", "c"]
        self.assertEqual(sorted(names, key=name_sort_key), ["a", "A", "á", "Á", "b", "B", "c"])

    def test_finalize_is_idempotent(self) -> None:
        tree = build_and_finalize(sample_entries())
        first = tree_shape(tree)

        finalize_archive_tree(tree)

        self.assertEqual(tree_shape(tree), first)

    def test_input_order_does_not_change_result(self) -> None:
        entries = sample_entries()
        expected = tree_shape(build_and_finalize(entries))
        rng = random.Random(1234)
        for _ in range(25):
            shuffled = list(entries)
            rng.shuffle(shuffled)
            tree = build_and_finalize(shuffled)
            self.assertEqual(tree_shape(tree), expected)
            self.assertEqual(set(tree.directory_index), {"src", "src/util", "assets", "assets/img", "assets/Fonts", "empty"})


class StructuralFailureTests(unittest.TestCase):
    def test_cycle_is_fatal(self) -> None:
        outer = DirectoryNode(name="outer", entry_name="outer")
        inner = DirectoryNode(name="inner", entry_name="outer/inner")
        outer.children.append(inner)
        inner.children.append(outer)
        tree = ArchiveTree(roots=[outer], directory_index={"outer": outer, "outer/inner": inner})

        with self.assertRaises(TreeStructureError):
            finalize_archive_tree(tree)
        self.assertFalse(tree.finalized)

    def test_shared_directory_is_fatal(self) -> None:
        shared = DirectoryNode(name="shared", entry_name="a/shared")
        first = DirectoryNode(name="a", entry_name="a", children=[shared])
        second = DirectoryNode(name="b", entry_name="b", children=[shared])
        tree = ArchiveTree(roots=[first, second])

        with self.assertRaises(TreeStructureError):
            finalize_archive_tree(tree)

    def test_unreachable_indexed_directory_is_fatal(self) -> None:
        orphan = DirectoryNode(name="orphan", entry_name="orphan")
        tree = ArchiveTree(roots=[], directory_index={"orphan": orphan})

        with self.assertRaises(TreeStructureError):
            finalize_archive_tree(tree)


class DeepTreeTests(unittest.TestCase):
    def test_paths_deeper_than_the_recursion_limit_finalize(self) -> None:
        depth = 1500
        deep_path = "/".join(["d"] * depth) + "/leaf.txt"
        tree = build_and_finalize(
            [ArchiveEntry(entry_name=deep_path, raw_size=1, compressed_size=1)],
            limits=BuildLimits(max_depth=depth + 1),
        )

        self.assertTrue(tree.finalized)
        self.assertEqual(len(tree.directory_index), depth)
        self.assertEqual(tree.directory_index["d"].aggregate_raw_size, 1)
        self.assertEqual(tree.directory_index["/".join(["d"] * depth)].aggregate_compressed_size, 1)


if __name__ == "__main__":
    unittest.main()
