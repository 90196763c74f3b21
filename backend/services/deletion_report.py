# backend/services/deletion_report.py

from __future__ import annotations

import typing as t
from dataclasses import dataclass
from types import MappingProxyType

CASCADE_DELETE = "cascade_delete"
HARD_DELETE = "hard_delete"


@dataclass(frozen=True)
class DeletionReport:
    entity_type: t.Any
    entity_id: int
    label: str
    tipo: str
    detalhes: t.Mapping[str, int]
    message: str

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "tipo": self.tipo,
            "detalhes": dict(self.detalhes),
            "entidade": {"tipo": self.entity_type.value, "id": self.entity_id, "nome": self.label},
        }


class DeletionReportBuilder:
    """Monta os relatórios de exclusão. Não acessa o banco."""

    def __init__(self, registry):
        self.registry = registry

    def _aggregate(self, pares):
        detalhes = {}
        for tipo, total in pares:
            chave = self.registry.descriptor(tipo).report_key
            detalhes[chave] = detalhes.get(chave, 0) + total
        return detalhes

    def build_cascade(self, plan, outcome):
        raiz = self.registry.descriptor(plan.root_type)
        # O último passo é a própria raiz e não entra nos detalhes
        detalhes = self._aggregate(outcome.counts[:-1])
        dependentes = sum(detalhes.values())
        message = (
            f'{raiz.display_name} "{plan.root_label}" e {dependentes} registro(s) dependente(s) '
            f'foram excluídos com sucesso!'
        )
        return DeletionReport(
            plan.root_type, plan.root_id, plan.root_label, CASCADE_DELETE,
            MappingProxyType(detalhes), message,
        )

    def build_hard_delete(self, entity_type, entity_id, label):
        raiz = self.registry.descriptor(entity_type)
        message = f'{raiz.display_name} "{label}" {raiz.inflect("excluído", "excluída")} com sucesso!'
        return DeletionReport(entity_type, entity_id, label, HARD_DELETE, MappingProxyType({}), message)

    def build_preview(self, plan, counts_by_type):
        """Prévia de uma cascata: `counts_by_type` traz, por tipo, quantas linhas distintas seriam excluídas."""
        raiz = self.registry.descriptor(plan.root_type)
        detalhes = self._aggregate(counts_by_type.items())
        message = (
            f'{raiz.display_name} "{plan.root_label}" será excluíd{raiz.inflect("o", "a")} '
            f'junto com {sum(detalhes.values())} registro(s) dependente(s).'
        )
        return DeletionReport(
            plan.root_type, plan.root_id, plan.root_label, CASCADE_DELETE,
            MappingProxyType(detalhes), message,
        )
