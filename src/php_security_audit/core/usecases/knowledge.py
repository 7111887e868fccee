from __future__ import annotations

from ..domain.models import KnowledgeBaseSnapshot
from ..ports import KnowledgeBasePort


class KnowledgeBaseUseCase:
    def __init__(self, *, knowledge_base: KnowledgeBasePort) -> None:
        self._knowledge_base = knowledge_base

    def execute(self) -> KnowledgeBaseSnapshot:
        patterns = self._knowledge_base.learned_patterns()
        # stable sort keeps first-learned order among equal counts
        ordered = sorted(patterns.items(), key=lambda item: item[1].count, reverse=True)
        return KnowledgeBaseSnapshot(
            stats=self._knowledge_base.statistics(),
            patterns=tuple(ordered),
        )
