# backend/services/deletion_guard.py

from dataclasses import dataclass, field
from typing import Dict

from .deletion_store import DeletionStore


@dataclass(frozen=True)
class BlockingCheck:
    deletable: bool
    conflicts: Dict[str, int] = field(default_factory=dict)

    @property
    def nonzero(self) -> Dict[str, int]:
        return {chave: total for chave, total in self.conflicts.items() if total}


class DeletionGuard:
    """Conta os dependentes diretos de uma raiz com política de bloqueio. Nunca exclui nada."""

    def __init__(self, registry, store=None):
        self.registry = registry
        self.store = store or DeletionStore()

    def check_blocking(self, root_type, root_id):
        contagens = {}
        for aresta in self.registry.direct_edges(root_type):
            filho = self.registry.descriptor(aresta.child)
            total = self.store.count_where(filho.model, aresta.foreign_key, [root_id])
            contagens[filho.report_key] = contagens.get(filho.report_key, 0) + total
        return BlockingCheck(
            deletable=not any(contagens.values()),
            conflicts=contagens,
        )
