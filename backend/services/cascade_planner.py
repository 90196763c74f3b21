# backend/services/cascade_planner.py
"""
Planejamento da exclusão em cascata.

O plano é uma lista plana de passos, já com os ids de filtro resolvidos:
cada passo exclui as linhas de um tipo cuja chave estrangeira aponta para um
conjunto de pais conhecido. Os ids intermediários (ex.: turmas de uma classe,
necessárias para filtrar as confirmações) são consultados aqui, antes de
qualquer exclusão. O último passo é sempre a própria raiz.
"""

from dataclasses import dataclass
from typing import Any, Tuple

from sqlalchemy.exc import SQLAlchemyError

from .deletion_errors import DependencyConflictError, NotFoundError, PlanningError
from .deletion_store import DeletionStore
from .dependency_registry import DeletionPolicy, EntityType


@dataclass(frozen=True)
class DeletionStep:
    entity_type: EntityType
    model: Any
    column: str
    ids: Tuple[int, ...]


@dataclass(frozen=True)
class DeletionPlan:
    root_type: EntityType
    root_id: int
    root_label: str
    steps: Tuple[DeletionStep, ...]

    @property
    def root_step(self) -> DeletionStep:
        return self.steps[-1]

    @property
    def dependent_steps(self) -> Tuple[DeletionStep, ...]:
        return self.steps[:-1]


class CascadePlanner:

    def __init__(self, registry, store=None):
        self.registry = registry
        self.store = store or DeletionStore()

    def plan(self, root_type, root_id):
        raiz = self.registry.descriptor(root_type)
        # Tipo cujas linhas estão sendo consultadas, para nomear uma falha do banco
        consultando = raiz
        resolvidos = {}

        def ids_do_pai(ligacao):
            if ligacao.via is None:
                return (root_id,)
            return ids_dos_filhos(ligacao.via)

        def ids_dos_filhos(ligacao):
            if ligacao not in resolvidos:
                filho = self.registry.descriptor(ligacao.edge.child)
                resolvidos[ligacao] = tuple(self.store.select_ids_where(
                    filho.model, ligacao.edge.foreign_key, ids_do_pai(ligacao)
                ))
            return resolvidos[ligacao]

        passos = []
        conflitos = {}
        try:
            linha = self.store.find_by_id(raiz.model, root_id)
            if linha is None:
                raise NotFoundError(root_type, root_id, raiz.display_name)
            rotulo = raiz.label_of(linha)

            for ligacao in self.registry.cascade_edges(root_type):
                aresta = ligacao.edge
                consultando = self.registry.descriptor(aresta.child)
                pais = ids_do_pai(ligacao)

                if aresta.policy is DeletionPolicy.BLOCK:
                    total = self.store.count_where(consultando.model, aresta.foreign_key, pais)
                    if total:
                        conflitos[consultando.report_key] = conflitos.get(consultando.report_key, 0) + total
                    continue

                passos.append(DeletionStep(aresta.child, consultando.model, aresta.foreign_key, pais))
        except SQLAlchemyError as e:
            raise PlanningError(
                root_type, root_id, raiz.display_name, consultando.entity_type, consultando.display_name,
            ) from e

        if conflitos:
            raise DependencyConflictError(root_type, root_id, raiz.display_name, conflitos, label=rotulo)

        passos.append(DeletionStep(root_type, raiz.model, 'id', (root_id,)))
        return DeletionPlan(root_type, root_id, rotulo, tuple(passos))
