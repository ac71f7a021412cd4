"""
Unit Tests for Virtual File Tree Operations
"""
import copy

import pytest

from app.core.exceptions import NotAFolderError, PathNotFoundError, ValidationError
from app.modules.filetree import (
    FileNode,
    FolderNode,
    collect_by_predicate,
    count_files,
    count_lines,
    delete_node,
    egest,
    expand_all_paths,
    find_by_path,
    find_or_none,
    flatten,
    insert_child,
    is_file,
    is_folder,
    iter_nodes,
    list_directory,
    rename_node,
    render_tree,
    replace_subtree,
    update_file_content,
)


class TestFindByPath:
    """Test path resolution"""

    def test_every_node_resolves_by_its_full_path(self, sample_tree):
        """Every node is reachable by the path iter_nodes reports for it"""
        for path, node in iter_nodes(sample_tree):
            assert find_by_path(sample_tree, path) is node

    def test_root_name_prefix_is_optional(self, sample_tree):
        """Paths with and without the root segment address the same file"""
        with_root = find_by_path(sample_tree, "project-root/src/App.jsx")
        without_root = find_by_path(sample_tree, "src/App.jsx")
        assert with_root is without_root
        assert with_root.name == "App.jsx"

    def test_leading_and_doubled_slashes_are_ignored(self, sample_tree):
        node = find_by_path(sample_tree, "/project-root//src/components/")
        assert node.name == "components"

    def test_empty_path_returns_root(self, sample_tree):
        assert find_by_path(sample_tree, "") is sample_tree

    def test_missing_segment_raises_path_not_found(self, sample_tree):
        with pytest.raises(PathNotFoundError) as exc_info:
            find_by_path(sample_tree, "project-root/src/missing/App.jsx")

        assert exc_info.value.code == "PATH_NOT_FOUND"
        assert exc_info.value.details["segment"] == "missing"

    def test_descending_into_file_raises_not_a_folder(self, sample_tree):
        with pytest.raises(NotAFolderError):
            find_by_path(sample_tree, "project-root/README.md/child")

    def test_find_or_none_returns_none_for_missing(self, sample_tree):
        assert find_or_none(sample_tree, "project-root/nope") is None
        assert find_or_none(sample_tree, "project-root/README.md/x") is None

    def test_duplicate_sibling_names_first_match_wins(self):
        """Duplicate names are tolerated and lookups return the first one"""
        tree = FolderNode(name="root", children=[
            FileNode(name="a.js", content="first"),
            FileNode(name="a.js", content="second"),
        ])
        assert find_by_path(tree, "root/a.js").content == "first"

    def test_folder_with_none_children_is_treated_as_empty(self):
        tree = FolderNode(name="root", children=None)
        assert list_directory(tree, "root") == []
        assert flatten(tree) == {}


class TestListDirectory:
    """Test directory listing"""

    def test_lists_children_in_order(self, sample_tree):
        names = [node.name for node in list_directory(sample_tree, "project-root")]
        assert names == ["src", "README.md", "empty.txt"]

    def test_listing_a_file_raises(self, sample_tree):
        with pytest.raises(NotAFolderError):
            list_directory(sample_tree, "project-root/README.md")


class TestTraversal:
    """Test flatten, node iteration and predicate collection"""

    def test_flatten_keys_include_root_name(self, sample_tree):
        files = flatten(sample_tree)

        assert "project-root/src/App.jsx" in files
        assert "project-root/src/components/Button.jsx" in files
        assert files["project-root/empty.txt"] == ""

    def test_flatten_is_depth_first_pre_order(self, sample_tree):
        assert list(flatten(sample_tree)) == [
            "project-root/src/App.jsx",
            "project-root/src/App.css",
            "project-root/src/index.css",
            "project-root/src/components/Button.jsx",
            "project-root/src/utils/format.js",
            "project-root/src/hooks/useToggle.js",
            "project-root/README.md",
            "project-root/empty.txt",
        ]

    def test_flatten_is_idempotent(self, sample_tree):
        assert flatten(sample_tree) == flatten(sample_tree)

    def test_flatten_on_single_file(self):
        assert flatten(FileNode(name="solo.txt", content="x")) == {"solo.txt": "x"}

    def test_count_files_matches_flatten(self, sample_tree, skeleton):
        assert count_files(sample_tree) == len(flatten(sample_tree)) == 8
        assert count_files(skeleton) == len(flatten(skeleton)) == 2

    def test_expand_all_paths_lists_every_folder(self, sample_tree):
        assert expand_all_paths(sample_tree) == [
            "project-root",
            "project-root/src",
            "project-root/src/components",
            "project-root/src/utils",
            "project-root/src/hooks",
        ]

    def test_collect_by_predicate_passes_name_path_and_content(self, sample_tree):
        seen = []

        def record(name, path, content):
            seen.append((name, path))
            return name.endswith(".css")

        collected = collect_by_predicate(sample_tree, record)

        assert [c.path for c in collected] == [
            "project-root/src/App.css",
            "project-root/src/index.css",
        ]
        assert collected[0].content == ".app { color: red; }"
        assert ("README.md", "project-root/README.md") in seen


class TestCountLines:
    """Test line counting and the empty-file rule"""

    def test_empty_files_contribute_zero_by_default(self, sample_tree):
        assert count_lines(sample_tree) == 19

    def test_count_empty_files_adds_one_per_empty_file(self, sample_tree):
        assert count_lines(sample_tree, count_empty_files=True) == 20

    def test_trailing_newline_counts_as_extra_segment(self):
        tree = FolderNode(name="root", children=[FileNode(name="a", content="one\ntwo\n")])
        assert count_lines(tree) == 3


class TestMutations:
    """Test copy-on-write mutations"""

    def test_insert_child_appends_new_file(self, sample_tree):
        updated = insert_child(sample_tree, "project-root/src", FileNode(name="x.js", content="// x"))

        assert "project-root/src/x.js" in flatten(updated)
        assert list_directory(updated, "project-root/src")[-1].name == "x.js"

    def test_insert_child_leaves_original_untouched(self, sample_tree):
        before = copy.deepcopy(egest(sample_tree))
        insert_child(sample_tree, "project-root/src", FileNode(name="x.js"))
        assert egest(sample_tree) == before

    def test_insert_child_under_file_raises_and_leaves_original(self, sample_tree):
        before = copy.deepcopy(egest(sample_tree))

        with pytest.raises(NotAFolderError):
            insert_child(sample_tree, "project-root/README.md", FileNode(name="x.js"))

        assert egest(sample_tree) == before

    def test_insert_child_copies_the_inserted_node(self, sample_tree):
        node = FileNode(name="x.js", content="a")
        updated = insert_child(sample_tree, "project-root", node)
        node.content = "changed"

        assert find_by_path(updated, "project-root/x.js").content == "a"

    def test_replace_subtree_overwrites_existing_child(self, sample_tree):
        updated = replace_subtree(
            sample_tree,
            "project-root/src/components",
            FolderNode(name="components", children=[FileNode(name="Card.jsx")])
        )

        names = [n.name for n in list_directory(updated, "project-root/src/components")]
        assert names == ["Card.jsx"]
        assert [n.name for n in list_directory(sample_tree, "project-root/src/components")] == ["Button.jsx"]

    def test_replace_subtree_appends_when_name_is_new(self, sample_tree):
        updated = replace_subtree(sample_tree, "project-root/docs", FolderNode(name="docs"))

        assert is_folder(find_by_path(updated, "project-root/docs"))
        assert find_or_none(sample_tree, "project-root/docs") is None

    def test_replace_subtree_at_root_returns_copy_of_node(self, sample_tree):
        replacement = FolderNode(name="other")
        updated = replace_subtree(sample_tree, "project-root", replacement)

        assert updated == replacement
        assert updated is not replacement

    def test_replace_subtree_only_replaces_first_duplicate(self):
        tree = FolderNode(name="root", children=[
            FileNode(name="a.js", content="first"),
            FileNode(name="a.js", content="second"),
        ])
        updated = replace_subtree(tree, "root/a.js", FileNode(name="a.js", content="new"))

        assert [c.content for c in updated.children] == ["new", "second"]

    def test_update_file_content_replaces_content(self, sample_tree):
        updated = update_file_content(sample_tree, "project-root/README.md", "# Changed")

        assert find_by_path(updated, "project-root/README.md").content == "# Changed"
        assert find_by_path(sample_tree, "project-root/README.md").content == "# Sample\n"

    def test_update_file_content_creates_missing_file(self, sample_tree):
        updated = update_file_content(sample_tree, "project-root/src/new.js", "// new")
        assert is_file(find_by_path(updated, "project-root/src/new.js"))

    def test_update_file_content_on_folder_raises(self, sample_tree):
        with pytest.raises(ValidationError):
            update_file_content(sample_tree, "project-root/src", "oops")

    def test_delete_node_removes_subtree(self, sample_tree):
        updated = delete_node(sample_tree, "project-root/src/components")

        assert find_or_none(updated, "project-root/src/components") is None
        assert count_files(updated) == count_files(sample_tree) - 1

    def test_delete_missing_node_raises(self, sample_tree):
        with pytest.raises(PathNotFoundError):
            delete_node(sample_tree, "project-root/src/ghost.js")

    def test_delete_root_is_rejected(self, sample_tree):
        with pytest.raises(ValidationError):
            delete_node(sample_tree, "project-root")

    def test_rename_node(self, sample_tree):
        updated = rename_node(sample_tree, "project-root/README.md", "README.txt")

        assert find_or_none(updated, "project-root/README.txt") is not None
        assert find_or_none(updated, "project-root/README.md") is None

    def test_rename_root(self, sample_tree):
        updated = rename_node(sample_tree, "project-root", "my-app")

        assert updated.name == "my-app"
        assert sample_tree.name == "project-root"

    @pytest.mark.parametrize("bad_name", ["", "a/b", ".", "..", "a\\b"])
    def test_rename_rejects_invalid_names(self, sample_tree, bad_name):
        with pytest.raises(ValidationError):
            rename_node(sample_tree, "project-root/README.md", bad_name)


class TestRenderTree:
    """Test tree rendering"""

    def test_render_uses_box_drawing_connectors(self, skeleton):
        assert render_tree(skeleton) == [
            "└── 📁 project-root",
            "    ├── 📁 src",
            "    │   └── 📄 index.js",
            "    └── 📄 README.md",
        ]

    def test_render_without_icons(self, skeleton):
        assert render_tree(skeleton, icons=False)[0] == "└── project-root"
