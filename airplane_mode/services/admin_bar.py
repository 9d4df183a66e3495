"""Admin toolbar node collector."""

from __future__ import annotations

from typing import Dict, List, Optional

from airplane_mode.core.protocols import ToolbarNode


class AdminBar:
    def __init__(self) -> None:
        self._nodes: Dict[str, ToolbarNode] = {}

    def add_node(self, node: ToolbarNode) -> None:
        # Same id replaces the earlier node
        self._nodes[node.id] = node

    def get_node(self, node_id: str) -> Optional[ToolbarNode]:
        return self._nodes.get(node_id)

    @property
    def nodes(self) -> List[ToolbarNode]:
        return list(self._nodes.values())
