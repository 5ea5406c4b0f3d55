"""Discussion thread structures.

Comments are stored in a flat arena and refer to their children by index,
so a fetched tree never needs parent/child object references. The arena is
built once per fetch and thrown away after flattening.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Submission:
    """The post at the root of a discussion."""

    native_id: str
    title: str
    subreddit: str
    score: int = 0
    author: Optional[str] = None
    body: Optional[str] = None
    link: Optional[str] = None


@dataclass
class ThreadNode:
    native_id: str
    parent_native_id: Optional[str] = None
    author: Optional[str] = None
    body: Optional[str] = None  # None for deleted/removed comments
    children: List[int] = field(default_factory=list)


@dataclass
class ThreadArena:
    nodes: List[ThreadNode] = field(default_factory=list)
    roots: List[int] = field(default_factory=list)

    def add(
        self,
        native_id: str,
        *,
        parent_native_id: Optional[str] = None,
        author: Optional[str] = None,
        body: Optional[str] = None,
        under: Optional[int] = None,
    ) -> int:
        """Append a node and link it under ``under`` (or as a root).

        Returns the new node's arena index.
        """
        index = len(self.nodes)
        self.nodes.append(
            ThreadNode(
                native_id=native_id,
                parent_native_id=parent_native_id,
                author=author,
                body=body,
            )
        )
        if under is None:
            self.roots.append(index)
        else:
            self.nodes[under].children.append(index)
        return index

    def __len__(self) -> int:
        return len(self.nodes)
