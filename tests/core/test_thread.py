"""Tests for core/thread.py."""

import re

from core.thread import ROOT_ID, flatten, render_submission
from models.thread import Submission, ThreadArena

SUBMISSION = Submission(
    native_id="abc123",
    title="Rust vs Go for CLI tools?",
    subreddit="programming",
    score=321,
    author="op",
    body="Which one do you prefer and why?",
)

HEADER = re.compile(r"^\[(\d+)\] u/(\S+)(?: \(reply to \[(\d+)\]\))?$")


def headers(blocks):
    """Parse (id, author, parent) out of every comment block."""
    parsed = []
    for block in blocks[1:]:
        match = HEADER.match(block.splitlines()[0])
        assert match, block
        cid, author, parent = match.groups()
        parsed.append((int(cid), author, int(parent) if parent else None))
    return parsed


def build_tree() -> ThreadArena:
    """
    c1 (alice)
      c2 (bob)
        c3 (carol)
      c4 (deleted, no body)
        c5 (dave)
    c6 (erin)
    """
    arena = ThreadArena()
    c1 = arena.add("c1", parent_native_id="abc123", author="alice", body="Rust.")
    c2 = arena.add("c2", parent_native_id="c1", author="bob", body="Why?", under=c1)
    arena.add("c3", parent_native_id="c2", author="carol", body="Speed.", under=c2)
    c4 = arena.add("c4", parent_native_id="c1", author=None, body=None, under=c1)
    arena.add("c5", parent_native_id="c4", author="dave", body="Agreed.", under=c4)
    arena.add("c6", parent_native_id="abc123", author="erin", body="Go.")
    return arena


def test_submission_is_first_block():
    blocks = flatten(SUBMISSION, ThreadArena())
    assert blocks == [render_submission(SUBMISSION)]
    assert blocks[0].startswith("# Rust vs Go for CLI tools?")
    assert f"[{ROOT_ID}] r/programming | u/op | score 321" in blocks[0]
    assert blocks[0].endswith("Which one do you prefer and why?")


def test_preorder_ids_and_parent_references():
    blocks = flatten(SUBMISSION, build_tree())
    assert headers(blocks) == [
        (1, "alice", 0),
        (2, "bob", 1),
        (3, "carol", 2),
        # c4 has no body: it takes id 4 but renders nothing
        (5, "dave", 4),
        (6, "erin", 0),
    ]


def test_ids_count_bodiless_nodes_in_visit_order():
    arena = ThreadArena()
    a = arena.add("a", parent_native_id="abc123", body=None)
    b = arena.add("b", parent_native_id="a", body=None, under=a)
    arena.add("c", parent_native_id="b", author="x", body="deep", under=b)
    blocks = flatten(SUBMISSION, arena)
    assert headers(blocks) == [(3, "x", 2)]


def test_every_comment_with_body_is_rendered():
    blocks = flatten(SUBMISSION, build_tree())
    bodies = [block.splitlines()[1] for block in blocks[1:]]
    assert bodies == ["Rust.", "Why?", "Speed.", "Agreed.", "Go."]


def test_missing_author_renders_unknown():
    arena = ThreadArena()
    arena.add("c1", parent_native_id="abc123", author=None, body="anonymous words")
    blocks = flatten(SUBMISSION, arena)
    assert blocks[1] == "[1] u/unknown (reply to [0])\nanonymous words"


def test_dangling_parent_resolves_to_root():
    arena = ThreadArena()
    first = arena.add("c1", parent_native_id="abc123", author="a", body="one")
    # Parent "gone" was pruned upstream and never appears in the tree
    arena.add("c2", parent_native_id="gone", author="b", body="two", under=first)
    blocks = flatten(SUBMISSION, arena)
    assert headers(blocks) == [(1, "a", 0), (2, "b", 0)]


def test_node_without_parent_has_no_reply_reference():
    arena = ThreadArena()
    arena.add("c1", parent_native_id=None, author="a", body="orphan")
    blocks = flatten(SUBMISSION, arena)
    assert blocks[1] == "[1] u/a\norphan"


def test_source_order_is_preserved():
    arena = ThreadArena()
    for name in ["z", "a", "m"]:
        arena.add(name, parent_native_id="abc123", author=name, body=name)
    assert [author for _, author, _ in headers(flatten(SUBMISSION, arena))] == [
        "z",
        "a",
        "m",
    ]


def test_flatten_is_repeatable():
    arena = build_tree()
    assert flatten(SUBMISSION, arena) == flatten(SUBMISSION, arena)


def test_max_depth_stops_descent():
    blocks = flatten(SUBMISSION, build_tree(), max_depth=1)
    assert headers(blocks) == [(1, "alice", 0), (2, "erin", 0)]


def test_max_children_limits_siblings():
    blocks = flatten(SUBMISSION, build_tree(), max_children=1)
    # Only the first child at each level: c1 -> c2 -> c3
    assert headers(blocks) == [(1, "alice", 0), (2, "bob", 1), (3, "carol", 2)]


def test_deep_tree_does_not_hit_recursion_limit():
    arena = ThreadArena()
    under = None
    parent = "abc123"
    for i in range(5000):
        under = arena.add(f"c{i}", parent_native_id=parent, author="a", body=str(i), under=under)
        parent = f"c{i}"
    blocks = flatten(SUBMISSION, arena)
    assert len(blocks) == 5001
    assert blocks[-1] == "[5000] u/a (reply to [4999])\n4999"


def test_link_submission_shows_link():
    link_post = Submission(
        native_id="x1",
        title="Interesting article",
        subreddit="rust",
        link="https://example.com/post",
    )
    block = render_submission(link_post)
    assert "Link: https://example.com/post" in block
    assert "u/unknown" in block
